"""CLI entrypoint: Typer app definition and command registration"""

import typer

from hexosrc.cli.commands import convert_cmd, init_cmd


app = typer.Typer(
    name="hexosrc",
    no_args_is_help=True,
    help="Reorganize a hexo source directory between inline headers and a central headers.json",
)

app.command(name="init")(init_cmd)
app.command(name="convert")(convert_cmd)
