"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from wpblocks.config import Settings, load_config
from wpblocks.core.export import block_stats, dump_payload
from wpblocks.core.models import blocks_to_dicts
from wpblocks.core.parse import parse_file
from wpblocks.core.pipeline import run_parse


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _read(file: Path):
    """Parse a single file, turning I/O errors into a CLI failure."""
    try:
        return parse_file(file)
    except OSError as e:
        _fail(f"Cannot read {file}", e)


def main_callback(
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="DEBUG, INFO, WARNING or ERROR")] = None,
    ):
    """Parse block-comment delimited documents into block trees."""
    settings = _settings(overrides={"log_level": log_level.upper() if log_level else None})
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")


def parse_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to parse")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    indent: Annotated[Optional[int], typer.Option("--indent", help="JSON indent; 0 = compact")] = None,
    ext: Annotated[Optional[str], typer.Option("--ext", help="Comma-separated suffixes to discover")] = None,
    ):
    """Parse documents and write one JSON block tree per file."""
    settings = _settings(overrides={"output_dir": out, "indent": indent, "extensions": ext})
    output_dir = Path(settings.output_dir)
    try:
        results = run_parse(path, output_dir, settings.suffixes, settings.indent)
    except RuntimeError as e:
        _fail(str(e))
    if not results:
        typer.echo(f"No documents found under {path}.")
        raise typer.Exit(1)
    for src, json_path in results:
        typer.echo(f"  {src} -> {json_path}")
    typer.echo(f"Parsed {len(results)} document(s) to {output_dir}/")


def show_cmd(
    file: Annotated[Path, typer.Argument(help="Document to parse")],
    indent: Annotated[Optional[int], typer.Option("--indent", help="JSON indent; 0 = compact")] = None,
    ):
    """Print the parsed block tree of a single document as JSON."""
    settings = _settings(overrides={"indent": indent})
    doc = _read(file)
    typer.echo(dump_payload(blocks_to_dicts(doc.blocks), settings.indent))


def stats_cmd(
    file: Annotated[Path, typer.Argument(help="Document to parse")],
    ):
    """Print block counts by name, nested blocks included."""
    doc = _read(file)
    for name, count in block_stats(doc.blocks).items():
        typer.echo(f"{name}: {count}")
