"""Typed command-line flag registry with explicit-set tracking.

``argparse`` can parse flags but cannot say which ones the user actually
passed. ``FlagSet`` keeps that record: every assignment through
:meth:`FlagSet.set` (including those made by :meth:`FlagSet.parse`) marks the
flag as explicitly set, and everything else still holds its default.

Examples:
    >>> fs = FlagSet("demo")
    >>> port = fs.int("port", 8080, "server port")
    >>> fs.parse(["-port=7777"])
    >>> port.value
    7777
    >>> [f.name for f in fs.set_flags()]
    ['port']

``command_line`` is the process-wide instance, filled from ``sys.argv`` by
the module-level :func:`parse`.

Tags:
    flags, argparse, registry, command-line
"""

from __future__ import annotations

import argparse
import re
import sys
from collections.abc import Iterator, Sequence
from datetime import timedelta
from pathlib import Path
from typing import Any

from overridefromenv.errors import FlagExistsError, FlagParseError, UnknownFlagError
from overridefromenv.registry import Flag, Parser

# ── Value parsers ────────────────────────────────────────────────────────

_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})

# Microseconds per unit; timedelta cannot hold anything finer.
_DURATION_UNITS = {
    "ns": 0.001,
    "us": 1.0,
    "µs": 1.0,
    "μs": 1.0,
    "ms": 1_000.0,
    "s": 1_000_000.0,
    "m": 60_000_000.0,
    "h": 3_600_000_000.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_UINT64_MAX = (1 << 64) - 1


def parse_bool(value: str) -> bool:
    """Accept the same spellings as Go's ``strconv.ParseBool``."""
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"invalid boolean {value!r}")


def _parse_base0(value: str, kind: str) -> int:
    # Optional sign, then 0x/0o/0b, a bare leading 0 for octal, or decimal.
    body = value[1:] if value[:1] in ("+", "-") else value
    if not body or not body.isascii() or body[0] in "+-" or any(c.isspace() for c in body):
        raise ValueError(f"invalid {kind} {value!r}")
    try:
        if len(body) > 1 and body[0] == "0" and body[1] not in "xXoObB_":
            number = int(body[1:], 8)
        else:
            number = int(body, 0)
    except ValueError:
        raise ValueError(f"invalid {kind} {value!r}") from None
    return -number if value[0] == "-" else number


def parse_int(value: str) -> int:
    """Parse a 64-bit integer, honouring ``0x``/``0o``/``0b`` and leading-``0`` octal."""
    number = _parse_base0(value, "integer")
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise ValueError(f"integer {value!r} out of range")
    return number


def parse_uint(value: str) -> int:
    if value[:1] in ("+", "-"):
        raise ValueError(f"invalid unsigned integer {value!r}")
    number = _parse_base0(value, "unsigned integer")
    if number > _UINT64_MAX:
        raise ValueError(f"unsigned integer {value!r} out of range")
    return number


def parse_float(value: str) -> float:
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"invalid float {value!r}") from None


def parse_duration(value: str) -> timedelta:
    """Parse a duration such as ``300ms``, ``-1.5h`` or ``2h45m``."""
    text = value
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    if text == "0":
        return timedelta(0)
    if not text:
        raise ValueError(f"invalid duration {value!r}")

    micros = 0.0
    pos = 0
    while pos < len(text):
        match = _DURATION_PART.match(text, pos)
        if match is None:
            raise ValueError(f"invalid duration {value!r}")
        number, unit = match.groups()
        micros += float(number) * _DURATION_UNITS[unit]
        pos = match.end()
    try:
        return timedelta(microseconds=sign * micros)
    except OverflowError:
        raise ValueError(f"invalid duration {value!r}: out of range") from None


# ── Registry ─────────────────────────────────────────────────────────────


class FlagSet:
    """An ordered set of typed flags.

    Flags are defined with the typed constructors (:meth:`string`,
    :meth:`int`, ...), each returning the registered :class:`Flag` whose
    ``value`` the caller reads after parsing.
    """

    def __init__(self, name: str = ""):
        self.name = name
        self.args: list[str] = []
        self._flags: dict[str, Flag] = {}
        self._actual: dict[str, Flag] = {}
        self._bool_flags: set[str] = set()
        self._parsed = False

    def __repr__(self) -> str:
        return f"FlagSet({self.name!r}, flags={len(self._flags)}, set={len(self._actual)})"

    # ── Definition ───────────────────────────────────────────────────

    def var(self, name: str, default: Any, parser: Parser, usage: str = "") -> Flag:
        """Register a flag with a custom *parser*.

        Raises:
            FlagExistsError: If *name* is already registered
        """
        if name in self._flags:
            raise FlagExistsError(name, self.name)
        flag = Flag(name=name, value=default, default=default, parser=parser, usage=usage)
        self._flags[name] = flag
        return flag

    def string(self, name: str, default: str = "", usage: str = "") -> Flag:
        return self.var(name, default, str, usage)

    def int(self, name: str, default: int = 0, usage: str = "") -> Flag:
        return self.var(name, default, parse_int, usage)

    def uint(self, name: str, default: int = 0, usage: str = "") -> Flag:
        if default < 0:
            raise ValueError(f"negative default for unsigned flag {name}: {default}")
        return self.var(name, default, parse_uint, usage)

    def float(self, name: str, default: float = 0.0, usage: str = "") -> Flag:
        return self.var(name, default, parse_float, usage)

    def bool(self, name: str, default: bool = False, usage: str = "") -> Flag:
        flag = self.var(name, default, parse_bool, usage)
        self._bool_flags.add(name)
        return flag

    def duration(self, name: str, default: timedelta | None = None, usage: str = "") -> Flag:
        return self.var(name, default if default is not None else timedelta(0), parse_duration, usage)

    # ── FlagRegistry protocol ────────────────────────────────────────

    def all_flags(self) -> list[Flag]:
        """Every registered flag, in lexical order."""
        return [self._flags[name] for name in sorted(self._flags)]

    def set_flags(self) -> list[Flag]:
        """Only flags that have been explicitly set, in lexical order."""
        return [self._actual[name] for name in sorted(self._actual)]

    def set(self, name: str, value: str) -> None:
        """Parse *value* into flag *name* and mark it explicitly set.

        Raises:
            UnknownFlagError: If *name* is not registered
            ValueError: If *value* is invalid for the flag's type
        """
        flag = self._flags.get(name)
        if flag is None:
            raise UnknownFlagError(name)
        flag.set(value)
        self._actual[name] = flag

    # ── Lookup ───────────────────────────────────────────────────────

    def lookup(self, name: str) -> Flag | None:
        return self._flags.get(name)

    def is_set(self, name: str) -> bool:
        return name in self._actual

    def __getitem__(self, name: str) -> Any:
        flag = self._flags.get(name)
        if flag is None:
            raise UnknownFlagError(name)
        return flag.value

    def __contains__(self, name: object) -> bool:
        return name in self._flags

    def __iter__(self) -> Iterator[Flag]:
        return iter(self.all_flags())

    def __len__(self) -> int:
        return len(self._flags)

    def as_namespace(self) -> argparse.Namespace:
        """Current values as a Namespace, with ``-`` in names mapped to ``_``."""
        return argparse.Namespace(**{name.replace("-", "_"): flag.value for name, flag in self._flags.items()})

    # ── Parsing ──────────────────────────────────────────────────────

    @property
    def parsed(self) -> bool:
        return self._parsed

    def parse(self, args: Sequence[str]) -> None:
        """Parse *args* and assign every flag that appears in them.

        Accepts ``-name=value``, ``-name value``, the same with ``--``, and
        a bare ``-name`` for bool flags. A bare bool flag never consumes the
        next argument, while any other flag written without ``=`` takes the
        next argument verbatim (even ``--`` or ``-5``). Everything after a
        standalone ``--`` and any non-flag argument ends up in :attr:`args`.

        Raises:
            FlagParseError: On an undefined flag, a missing value or a value
                that does not convert
        """
        args, trailing = self._join_values(list(args))

        parser = self._argument_parser()
        try:
            namespace, rest = parser.parse_known_args(args)
        except argparse.ArgumentError as exc:
            raise FlagParseError(str(exc), cause=exc) from exc

        for arg in rest:
            if arg.startswith("-") and arg != "-":
                raise FlagParseError(f"flag provided but not defined: {arg}", context={"arg": arg})

        for name, raw in vars(namespace).items():
            try:
                self.set(name, raw)
            except ValueError as exc:
                raise FlagParseError(
                    f'invalid value "{raw}" for flag -{name}: {exc}',
                    context={"flag": name, "value": raw},
                    cause=exc,
                ) from exc

        self.args = rest + trailing
        self._parsed = True

    def _join_values(self, args: list[str]) -> tuple[list[str], list[str]]:
        """Rewrite known flags into ``-name=value`` form and split off the tail after ``--``."""
        joined: list[str] = []
        i = 0
        while i < len(args):
            arg = args[i]
            if arg == "--":
                return joined, args[i + 1 :]
            name = arg.lstrip("-") if arg.startswith("-") and "=" not in arg else None
            if name in self._bool_flags and len(arg) - len(name) <= 2:
                joined.append(f"{arg}=true")
            elif name in self._flags and len(arg) - len(name) <= 2 and i + 1 < len(args):
                joined.append(f"{arg}={args[i + 1]}")
                i += 1
            else:
                joined.append(arg)
            i += 1
        return joined, []

    def _argument_parser(self) -> argparse.ArgumentParser:
        # SUPPRESS keeps untouched flags out of the namespace entirely.
        parser = argparse.ArgumentParser(
            prog=self.name or None,
            add_help=False,
            allow_abbrev=False,
            exit_on_error=False,
            argument_default=argparse.SUPPRESS,
        )
        for name, flag in self._flags.items():
            parser.add_argument(f"-{name}", f"--{name}", dest=name, help=flag.usage, metavar="VALUE")
        return parser


# ── Process-wide default ─────────────────────────────────────────────────

command_line = FlagSet(Path(sys.argv[0]).name if sys.argv and sys.argv[0] else "")


def parse(args: Sequence[str] | None = None) -> None:
    """Parse ``sys.argv[1:]`` (or *args*) into :data:`command_line`."""
    command_line.parse(sys.argv[1:] if args is None else args)


def parsed() -> bool:
    return command_line.parsed
