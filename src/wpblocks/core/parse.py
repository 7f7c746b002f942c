"""File discovery and block parsing of source documents"""

import logging
from pathlib import Path
from typing import Iterable

from wpblocks.core.models import ParsedDoc
from wpblocks.core.parser import BlockParser
from wpblocks.core.utils.hashing import sha256
from wpblocks.core.utils.slug import slugify


logger = logging.getLogger(__name__)

DEFAULT_SUFFIXES = {'.html', '.htm', '.txt'}


def discover_files(path: Path, suffixes: Iterable[str] = DEFAULT_SUFFIXES) -> list[Path]:
    """Return sorted matching files under path, or [path] if a single matching file."""
    suffixes = {s.lower() for s in suffixes}
    if path.is_file():
        return [path] if path.suffix.lower() in suffixes else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix.lower() in suffixes)


def parse_file(path: Path, parser: BlockParser = None) -> ParsedDoc:
    """Parse a single file into a ParsedDoc; undecodable bytes are replaced."""
    raw = path.read_bytes()
    document = raw.decode('utf-8', errors='replace')
    blocks = (parser or BlockParser()).parse(document)
    logger.info(f"Parsed {path}: {len(blocks)} top-level block(s)")
    return ParsedDoc(
        path=path,
        slug=slugify(path.stem),
        hash=sha256(raw),
        document=document,
        blocks=blocks,
    )


def parse_dir(path: Path, suffixes: Iterable[str] = DEFAULT_SUFFIXES) -> list[ParsedDoc]:
    """Parse all matching files under path (file or directory), reusing one parser."""
    parser = BlockParser()
    return [parse_file(p, parser) for p in discover_files(path, suffixes)]
