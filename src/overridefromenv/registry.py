"""Flag value object and the registry protocol the override pass consumes.

Any object with ``all_flags()``, ``set_flags()`` and ``set(name, value)``
works as a registry: the bundled ``FlagSet``, the click adapter, or a
caller's own wrapper around some other argument parser.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

Parser = Callable[[str], Any]


def _identity(value: str) -> str:
    return value


@dataclass
class Flag:
    """A named, typed, mutable setting.

    Attributes:
        name: Identifier, unique within its registry
        value: Current value
        default: Value the flag was registered with
        parser: Converts a string to the flag's type, raising ``ValueError``
        usage: Help text (not used by the override pass)
    """

    name: str
    value: Any
    default: Any = None
    parser: Parser = field(default=_identity, repr=False)
    usage: str = ""

    def set(self, raw: str) -> None:
        """Parse *raw* and assign it. The value is untouched on failure."""
        self.value = self.parser(raw)

    def __str__(self) -> str:
        return _format_value(self.value)


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


@runtime_checkable
class FlagRegistry(Protocol):
    """What the override pass needs from a flag registry.

    ``set`` must raise ``ValueError`` (or a subclass) when *value* is not a
    valid representation of the flag's type.
    """

    def all_flags(self) -> Iterable[Flag]: ...

    def set_flags(self) -> Iterable[Flag]: ...

    def set(self, name: str, value: str) -> None: ...
