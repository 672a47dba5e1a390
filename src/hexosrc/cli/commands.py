"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from hexosrc.config import Settings, load_config
from hexosrc.core.errors import HexoSourceError
from hexosrc.core.models import RunReport
from hexosrc.core.pipeline import run_convert, run_init


SourceOpt = Annotated[Path, typer.Option("--source", "-s", help="Source directory to read from")]
DestinationOpt = Annotated[Path, typer.Option("--destination", "-d", help="Destination directory to write to")]
ForceOpt = Annotated[bool, typer.Option("--force", "-f", help="Clear a non-empty destination directory first")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then set up logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    return settings


def _echo_report(report: RunReport) -> None:
    """Print notes and skipped records as warnings, then OK."""
    for note in report.notes:
        typer.echo(f"warning - {note}", err=True)
    for skip in report.skipped:
        typer.echo(f"warning - {skip}, you may need to handle it manually", err=True)
    typer.echo("OK")


def init_cmd(
    source: SourceOpt,
    destination: DestinationOpt,
    force: ForceOpt = False,
    ):
    """Initialize the custom layout (body files + headers.json) from a hexo source dir."""
    settings = _settings()
    try:
        report = run_init(source, destination, settings, force=force)
    except HexoSourceError as e:
        _fail(str(e))
    except OSError as e:
        _fail("Init failed", e)
    _echo_report(report)


def convert_cmd(
    source: SourceOpt,
    destination: DestinationOpt,
    force: ForceOpt = False,
    autofill: Annotated[Optional[bool], typer.Option(
        "--autofill/--no-autofill",
        help="Fill missing title, date, updated and description fields from the file name, content and git log",
    )] = None,
    ):
    """Convert the custom layout back into a hexo source dir."""
    settings = _settings(overrides={"autofill": autofill})
    try:
        report = run_convert(source, destination, settings, force=force)
    except HexoSourceError as e:
        _fail(str(e))
    except OSError as e:
        _fail("Convert failed", e)
    _echo_report(report)
