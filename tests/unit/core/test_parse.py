"""Unit tests for core/parse.py"""

from wpblocks.core.models import ParsedDoc
from wpblocks.core.parse import discover_files, parse_dir, parse_file
from wpblocks.core.utils.hashing import sha256


def test_discover_files_single(tmp_path):
    """discover_files returns a list with one file when given a file path."""
    f = tmp_path / "post.html"
    f.write_text("<p>x</p>")
    assert discover_files(f) == [f]


def test_discover_files_unmatched_single(tmp_path):
    """A single file with an unknown suffix is skipped."""
    f = tmp_path / "image.png"
    f.write_bytes(b"\x89PNG")
    assert discover_files(f) == []


def test_discover_files_dir(tmp_path):
    """discover_files finds matching files recursively, sorted."""
    (tmp_path / "b.html").write_text("b")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "a.txt").write_text("a")
    (sub / "notes.md").write_text("skip")
    assert discover_files(tmp_path) == sorted([tmp_path / "b.html", sub / "a.txt"])


def test_discover_files_custom_suffixes(tmp_path):
    """Only the requested suffixes are picked up, case-insensitively."""
    (tmp_path / "a.HTML").write_text("a")
    (tmp_path / "b.post").write_text("b")
    assert discover_files(tmp_path, {".post"}) == [tmp_path / "b.post"]
    assert discover_files(tmp_path, {".html"}) == [tmp_path / "a.HTML"]


def test_parse_file(tmp_path):
    """parse_file produces a ParsedDoc with slug, hash and blocks."""
    f = tmp_path / "My Post.html"
    raw = "<!-- wp:paragraph --><p>Hi</p><!-- /wp:paragraph -->\n"
    f.write_text(raw, encoding="utf-8")
    doc = parse_file(f)
    assert isinstance(doc, ParsedDoc)
    assert doc.slug == "my-post"
    assert doc.hash == sha256(raw.encode("utf-8"))
    assert doc.document == raw
    assert [b.name for b in doc.blocks] == ["core/paragraph", None]


def test_parse_file_invalid_utf8(tmp_path):
    """Undecodable bytes are replaced instead of failing the parse."""
    f = tmp_path / "broken.html"
    f.write_bytes(b"<!-- wp:a -->\xff<!-- /wp:a -->")
    [block] = parse_file(f).blocks
    assert block.inner_html == "\ufffd"


def test_parse_dir(tmp_path):
    """parse_dir parses every discovered file."""
    (tmp_path / "one.html").write_text("<!-- wp:a /-->")
    (tmp_path / "two.html").write_text("text")
    docs = parse_dir(tmp_path)
    assert [d.slug for d in docs] == ["one", "two"]
