"""Pipeline: discover, parse and export block trees"""

from pathlib import Path
from typing import Iterable

from wpblocks.core.export import write_doc
from wpblocks.core.parse import DEFAULT_SUFFIXES, discover_files, parse_file
from wpblocks.core.parser import BlockParser


def run_parse(
    path: str,
    output_dir: Path,
    suffixes: Iterable[str] = DEFAULT_SUFFIXES,
    indent: int = 2,
    ) -> list[tuple[Path, Path]]:
    """Parse path and write one JSON tree per document, laid out relative to path.

    Returns (source_path, json_path) pairs.
    """
    parser = BlockParser()
    results = []
    root = Path(path)
    for p in discover_files(root, suffixes):
        try:
            doc = parse_file(p, parser)
            results.append((p, write_doc(doc, output_dir, indent, root)))
        except (OSError, ValueError) as e:
            raise RuntimeError(f"Failed to parse {p}: {e}") from e
    return results
