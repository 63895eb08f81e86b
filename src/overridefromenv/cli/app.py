"""
Root Typer application for the overridefromenv CLI.
"""

from __future__ import annotations

from enum import Enum
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

import typer
from pydantic import ValidationError
from rich.markup import escape
from typer import Typer

from overridefromenv import __version__
from overridefromenv.cli.commands import resolve, show_keys
from overridefromenv.cli.utils import err_console
from overridefromenv.logging import configure_logging

app = Typer(
    name="overridefromenv",
    help="overridefromenv: set unset flags from environment variables.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class LogFormat(str, Enum):
    CONSOLE = "console"
    JSON = "json"


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        try:
            v = pkg_version("overridefromenv")
        except PackageNotFoundError:
            v = __version__
        typer.echo(f"overridefromenv {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: LogLevel | None = typer.Option(None, "--log-level", help="Log level (default from settings)."),
    log_format: LogFormat | None = typer.Option(None, "--log-format", help="Log format (default from settings)."),
) -> None:
    """overridefromenv CLI: inspect environment keys and resolve flags."""
    try:
        configure_logging(
            level=log_level.value if log_level else None,
            format=log_format.value if log_format else None,
            force=True,
        )
    except ValidationError as e:
        err_console.print(f"[bold red]Invalid settings[/bold red]: {escape(str(e))}", highlight=False)
        raise typer.Exit(code=1) from e


app.command("key")(show_keys)
app.command("resolve")(resolve)
