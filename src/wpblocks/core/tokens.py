"""Delimiter token variants produced by the tokenizer"""

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class NoMoreTokens:
    """No further delimiter between the scan offset and the end of the document."""


@dataclass(frozen=True)
class VoidBlock:
    name:   str
    attrs:  dict[str, Any]
    start:  int
    length: int


@dataclass(frozen=True)
class BlockOpener:
    name:   str
    attrs:  dict[str, Any]
    start:  int
    length: int


@dataclass(frozen=True)
class BlockCloser:
    name:   str
    start:  int
    length: int


Token = Union[NoMoreTokens, VoidBlock, BlockOpener, BlockCloser]
