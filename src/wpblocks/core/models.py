"""Block tree records and parse-time structures"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field


class Block(BaseModel):
    """A parsed node: a named delimited region, or freeform text when name is None."""
    model_config = ConfigDict(populate_by_name=True)

    name:          Optional[str] = Field(default=None, alias="blockName")
    attributes:    Optional[dict[str, Any]] = Field(default=None, alias="attrs")
    inner_blocks:  list[Block] = Field(default_factory=list, alias="innerBlocks")
    inner_html:    str = Field(default="", alias="innerHTML")
    inner_content: list[Optional[str]] = Field(default_factory=list, alias="innerContent")   # None marks a child

    @property
    def is_freeform(self) -> bool:
        return self.name is None

    def append_html(self, html: str) -> None:
        """Append a text fragment; empty fragments are never recorded."""
        if html:
            self.inner_html += html
            self.inner_content.append(html)

    def append_block(self, block: Block) -> None:
        """Append a child and its position marker."""
        self.inner_blocks.append(block)
        self.inner_content.append(None)

    def to_dict(self) -> dict[str, Any]:
        """Return the interop layout: blockName, attrs, innerBlocks, innerHTML, innerContent."""
        return self.model_dump(by_alias=True)


def freeform(html: str) -> Block:
    """Build an anonymous block holding a single text fragment."""
    return Block(name=None, attributes={}, inner_html=html, inner_content=[html])


def blocks_to_dicts(blocks: list[Block]) -> list[dict[str, Any]]:
    return [b.to_dict() for b in blocks]


def walk_blocks(blocks: list[Block]) -> Iterator[Block]:
    """Yield every block depth-first, parents before their children."""
    for block in blocks:
        yield block
        yield from walk_blocks(block.inner_blocks)


@dataclass
class Frame:
    """A block whose opener has been seen but whose closer has not."""
    block:              Block
    token_start:        int            # byte offset of the opening delimiter
    token_length:       int
    prev_offset:        Optional[int] = None
    leading_html_start: Optional[int] = None   # start of freeform text before the opener

    def __post_init__(self) -> None:
        if self.prev_offset is None:
            self.prev_offset = self.token_start + self.token_length


@dataclass
class ParsedDoc:
    """Parse result for a single source file; not persisted."""
    path:     Path
    slug:     str
    hash:     str               # SHA-256 of the raw file bytes
    document: str
    blocks:   list[Block] = field(default_factory=list)
