"""Export: build the JSON payload for a parsed document and write it out"""

import json
from collections import Counter
from pathlib import Path
from typing import Optional

from wpblocks.core.models import Block, ParsedDoc, blocks_to_dicts, walk_blocks


FREEFORM_KEY = "freeform"


def block_stats(blocks: list[Block]) -> dict[str, int]:
    """Count blocks by name across the whole tree, sorted by name; freeform text under 'freeform'."""
    counts = Counter(b.name or FREEFORM_KEY for b in walk_blocks(blocks))
    return dict(sorted(counts.items()))


def build_payload(doc: ParsedDoc) -> dict:
    """Build the JSON dict: slug, path, hash, stats, blocks.

    blocks uses the interop layout (blockName, attrs, innerBlocks, innerHTML,
    innerContent) so the output can be consumed by code expecting it.
    """
    return {
        "slug": doc.slug,
        "path": str(doc.path),
        "hash": doc.hash,
        "stats": block_stats(doc.blocks),
        "blocks": blocks_to_dicts(doc.blocks),
    }


def dump_payload(payload, indent: int = 2) -> str:
    return json.dumps(payload, indent=indent or None, ensure_ascii=False)


def write_doc(doc: ParsedDoc, output_dir: Path, indent: int = 2, root: Optional[Path] = None) -> Path:
    """Write the block tree JSON for a single document.

    Output path mirrors the source layout below the discovery root:
      output_dir / doc.path.relative_to(root).parent / doc.slug.json

    root defaults to the current directory. A file root maps its document
    directly under output_dir. Raises ValueError when the destination would
    fall outside output_dir.
    """
    src = Path(doc.path).resolve()
    base = Path(root).resolve() if root is not None else Path.cwd()
    if base.is_file():
        base = base.parent
    try:
        rel_dir = src.parent.relative_to(base)
    except ValueError as e:
        raise ValueError(f"{doc.path} is not under {base}") from e

    out_root = output_dir.resolve()
    json_path = (out_root / rel_dir / f"{doc.slug}.json").resolve()
    if not json_path.is_relative_to(out_root):
        raise ValueError(f"Refusing to write {json_path} outside {out_root}")

    json_path.parent.mkdir(parents=True, exist_ok=True)
    json_path.write_text(dump_payload(build_payload(doc), indent), encoding='utf-8')
    return json_path
