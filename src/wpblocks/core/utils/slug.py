"""Slug generation for output file names"""

import re


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated slug; falls back to 'doc'."""
    text = text.lower()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-') or 'doc'
