"""Shared fixtures for core unit tests"""

import json

import pytest

from wpblocks.core.parser import BlockParser


CANONICAL_DOC = """\
<!-- wp:heading {"level":2} -->
<h2>Title</h2>
<!-- /wp:heading -->

<!-- wp:columns -->
<div class="wp-block-columns"><!-- wp:column -->
<div class="wp-block-column"><!-- wp:paragraph -->
<p>Left</p>
<!-- /wp:paragraph --></div>
<!-- /wp:column --></div>
<!-- /wp:columns -->

<!-- wp:spacer {"height":"20px"} /-->
"""


def _serialize(block) -> str:
    """Rebuild the source span of a block written in canonical delimiter form."""
    if block.is_freeform:
        return block.inner_html
    name = block.name.removeprefix("core/")
    attrs = f" {json.dumps(block.attributes, separators=(',', ':'))}" if block.attributes else ""
    if not block.inner_content:
        return f"<!-- wp:{name}{attrs} /-->"
    children = iter(block.inner_blocks)
    body = "".join(_serialize(next(children)) if part is None else part for part in block.inner_content)
    return f"<!-- wp:{name}{attrs} -->{body}<!-- /wp:{name} -->"


@pytest.fixture(name="parser")
def parser_fixture():
    return BlockParser()


@pytest.fixture(name="canonical_doc")
def canonical_doc_fixture():
    return CANONICAL_DOC


@pytest.fixture(name="reconstruct")
def reconstruct_fixture():
    """Return a function mapping parsed blocks back to source text."""
    return lambda blocks: "".join(_serialize(b) for b in blocks)
