"""Block delimiter scanning and classification

A delimiter is an HTML comment of the form::

    <!-- wp:namespace/name {"json": "attrs"} /-->

A leading ``/`` before ``wp:`` marks a closer and a trailing ``/`` before
``-->`` marks a void (self-closing) block. The namespace is optional and
defaults to ``core/``. All offsets are byte offsets into the UTF-8 document.
"""

import json
import re
from typing import Any, Optional

from wpblocks.core.tokens import BlockCloser, BlockOpener, NoMoreTokens, Token, VoidBlock
from wpblocks.core.utils.report import Reporter, report_error


DEFAULT_NAMESPACE = 'core/'
ATTRS_CONTEXT = 'parse_block_attr'

# The attrs group is possessive so a comment that never closes its JSON
# object cannot backtrack catastrophically.
DELIMITER_RE = re.compile(
    rb'<!--\s+(?P<closer>/)?wp:(?P<namespace>[a-z][a-z0-9_-]*/)?(?P<name>[a-z][a-z0-9_-]*)\s+'
    rb'(?P<attrs>\{(?:(?:[^}]+|\}+(?=\})|(?!\}\s+/?-->).)*+)?\}\s+)?'
    rb'(?P<void>/)?-->',
    re.DOTALL,
)

# Escaped backslashes are consumed first so "\\u0041" is left alone.
UNICODE_ESCAPE_RE = re.compile(
    r'\\\\|\\u(d[89ab][0-9a-f]{2})\\u(d[c-f][0-9a-f]{2})|\\u([0-9a-f]{4})',
    re.IGNORECASE,
)


def _unescape(match: re.Match) -> str:
    high, low, single = match.groups()
    if high:
        return chr(0x10000 + ((int(high, 16) - 0xD800) << 10) + (int(low, 16) - 0xDC00))
    if single is None:
        return match.group(0)
    code = int(single, 16)
    # Characters that must stay escaped inside a JSON string, and lone surrogates.
    if code < 0x20 or code in (0x22, 0x5C) or 0xD800 <= code <= 0xDFFF:
        return match.group(0)
    return chr(code)


def unicode_to_utf8(text: str) -> str:
    """Rewrite \\uXXXX escapes as literal characters where that keeps the JSON equivalent.

    Escaped backslashes are matched too and returned unchanged, so the text after
    them is never read as an escape.
    """
    return UNICODE_ESCAPE_RE.sub(_unescape, text)


def decode_attrs(raw: bytes) -> tuple[dict[str, Any], Optional[Exception]]:
    """Decode an attribute segment; return (attrs, None) or ({}, error)."""
    try:
        attrs = json.loads(unicode_to_utf8(raw.decode('utf-8', 'surrogatepass')))
    except (ValueError, RecursionError) as e:
        return {}, e
    if not isinstance(attrs, dict):
        return {}, TypeError(f"expected a JSON object, got {type(attrs).__name__}")
    return attrs, None


def next_token(document: bytes, offset: int, reporter: Reporter = report_error) -> Token:
    """Find and classify the leftmost delimiter at or after offset."""
    m = DELIMITER_RE.search(document, offset)
    if m is None:
        return NoMoreTokens()

    start, end = m.span()
    namespace = m.group('namespace') or DEFAULT_NAMESPACE.encode()
    name = (namespace + m.group('name')).decode('ascii')

    # A closer never carries attributes; a void marker on it is ignored too.
    if m.group('closer') is not None:
        return BlockCloser(name=name, start=start, length=end - start)

    attrs: dict[str, Any] = {}
    if m.group('attrs') is not None:
        attrs, error = decode_attrs(m.group('attrs'))
        if error is not None:
            reporter(error, ATTRS_CONTEXT)

    if m.group('void') is not None:
        return VoidBlock(name=name, attrs=attrs, start=start, length=end - start)
    return BlockOpener(name=name, attrs=attrs, start=start, length=end - start)
