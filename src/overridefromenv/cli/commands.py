"""
CLI: ``overridefromenv key`` and ``overridefromenv resolve``.
"""

from __future__ import annotations

from dataclasses import dataclass

import typer
from rich.markup import escape

from overridefromenv.cli.utils import build_flagset, console, err_console, output_rows, parse_assignment
from overridefromenv.errors import ConversionError, UnknownFlagError
from overridefromenv.logging import get_logger
from overridefromenv.override import env_key, override, plan

log = get_logger(__name__)


@dataclass
class ResolvedFlag:
    flag: str
    env_key: str
    source: str
    value: str


def show_keys(
    prefix: str = typer.Argument(..., help="Key prefix; pass '' for none."),
    names: list[str] = typer.Argument(..., help="Flag names."),
) -> None:
    """Print the environment variable consulted for each flag name."""
    for name in names:
        console.print(env_key(prefix, name), highlight=False)


def resolve(
    prefix: str = typer.Option("", "--prefix", "-p", help="Environment key prefix."),
    flags: list[str] = typer.Option([], "--flag", "-f", help="Flag to define, as NAME[:TYPE][=DEFAULT]."),
    explicit: list[str] = typer.Option([], "--set", "-s", help="Explicit value, as NAME=VALUE."),
    as_json: bool = typer.Option(False, "--json", help="Output as JSON."),
) -> None:
    """Resolve flags against explicit values and the environment."""
    fs = build_flagset(flags)

    for text in explicit:
        name, value = parse_assignment(text)
        try:
            fs.set(name, value)
        except UnknownFlagError as e:
            raise typer.BadParameter(str(e), param_hint="--set") from e
        except ValueError as e:
            raise typer.BadParameter(f"bad value for {name}: {e}", param_hint="--set") from e

    bindings = {binding.flag: binding for binding in plan(fs, prefix)}
    log.debug("resolving", prefix=prefix, flags=len(fs), explicit=len(fs.set_flags()))

    try:
        override(fs, prefix)
    except ConversionError as e:
        log.error("override_failed", **e.to_dict())
        err_console.print(f"[bold red]Error[/bold red] ({e.category.value}): {escape(e.message)}", highlight=False)
        raise typer.Exit(code=1) from e

    rows = []
    for flag in fs.all_flags():
        binding = bindings[flag.name]
        if binding.explicit:
            source = "explicit"
        elif binding.applies:
            source = "env"
            log.info("flag_overridden", flag=flag.name, env_key=binding.env_key)
        else:
            source = "default"
        rows.append(ResolvedFlag(flag=flag.name, env_key=binding.env_key, source=source, value=str(flag)))

    output_rows(rows, as_json=as_json, title=f"Flags ({prefix or 'no prefix'})")
