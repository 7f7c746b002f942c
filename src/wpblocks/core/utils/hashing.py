"""SHA-256 content hashing for source documents"""

import hashlib


def sha256(content: bytes | str) -> str:
    """Return hex-encoded SHA-256 of content; str is hashed as UTF-8."""
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.sha256(content).hexdigest()
