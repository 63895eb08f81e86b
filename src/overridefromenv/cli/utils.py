"""
CLI utility helpers: flag-spec parsing and output formatting.
"""

from __future__ import annotations

import json
import re
from dataclasses import asdict
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from overridefromenv.errors import FlagExistsError
from overridefromenv.flagset import FlagSet

console = Console()
err_console = Console(stderr=True)

FLAG_TYPES = ("string", "int", "uint", "float", "bool", "duration")

_FLAG_SPEC = re.compile(r"^(?P<name>[^:=\s]+)(?::(?P<type>[a-z]+))?(?:=(?P<default>.*))?$")
_ASSIGNMENT = re.compile(r"^(?P<name>[^=\s]+)=(?P<value>.*)$")


# ── Flag specs ───────────────────────────────────────────────────────────


def build_flagset(specs: list[str], name: str = "resolve") -> FlagSet:
    """Build a ``FlagSet`` from ``NAME[:TYPE][=DEFAULT]`` specs.

    Raises:
        typer.BadParameter: On a malformed spec, unknown type, duplicate name or bad default
    """
    fs = FlagSet(name)
    for spec in specs:
        match = _FLAG_SPEC.match(spec)
        if match is None:
            raise typer.BadParameter(f"expected NAME[:TYPE][=DEFAULT], got {spec!r}", param_hint="--flag")
        flag_name = match.group("name")
        flag_type = match.group("type") or "string"
        if flag_type not in FLAG_TYPES:
            raise typer.BadParameter(
                f"unknown type {flag_type!r} for {flag_name} (choose from {', '.join(FLAG_TYPES)})",
                param_hint="--flag",
            )
        define = getattr(fs, flag_type)
        try:
            flag = define(flag_name)
        except FlagExistsError as e:
            raise typer.BadParameter(f"duplicate flag {flag_name!r}", param_hint="--flag") from e
        default = match.group("default")
        if default is not None:
            try:
                flag.set(default)
            except ValueError as e:
                raise typer.BadParameter(f"bad default for {flag_name}: {e}", param_hint="--flag") from e
            flag.default = flag.value
    return fs


def parse_assignment(text: str) -> tuple[str, str]:
    """Split ``NAME=VALUE``."""
    match = _ASSIGNMENT.match(text)
    if match is None:
        raise typer.BadParameter(f"expected NAME=VALUE, got {text!r}", param_hint="--set")
    return match.group("name"), match.group("value")


# ── Output helpers ───────────────────────────────────────────────────────


def _to_dict(obj: Any) -> dict[str, Any]:
    """Convert dataclass / pydantic model / dict to plain dict."""
    if hasattr(obj, "model_dump"):
        return obj.model_dump()
    if hasattr(obj, "__dataclass_fields__"):
        return asdict(obj)
    if isinstance(obj, dict):
        return obj
    return {"value": str(obj)}


def output_rows(rows: list[Any], *, as_json: bool = False, title: str = "") -> None:
    """Render a list of dataclasses/dicts as JSON or a Rich table."""
    if as_json:
        console.print_json(json.dumps([_to_dict(r) for r in rows], default=str))
        return

    if not rows:
        console.print("[dim]No flags.[/dim]")
        return

    first = _to_dict(rows[0])
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in first:
        table.add_column(col, overflow="fold")
    for row in rows:
        table.add_row(*(str(v) for v in _to_dict(row).values()))
    console.print(table)
