"""CLI entrypoint: Typer app definition and command registration"""

import typer

from wpblocks.cli.commands import main_callback, parse_cmd, show_cmd, stats_cmd


app = typer.Typer(name="wpblocks", no_args_is_help=True, help="Block-comment document parser")

app.callback()(main_callback)
app.command(name="parse")(parse_cmd)
app.command(name="show")(show_cmd)
app.command(name="stats")(stats_cmd)
