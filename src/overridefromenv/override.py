"""Set unset flags from environment variables.

After command-line parsing, every flag the user did not pass explicitly is
looked up in the environment under a derived key and, when present, assigned
from it. Explicit arguments always win over the environment, and the
environment wins over registered defaults.

Manifesto:
    An application should be configurable the same way from ``-port=9090``
    and ``APP_PORT=9090`` without every flag growing its own env lookup.

    - **Explicit wins:** Flags the caller set are never touched
    - **One rule for keys:** ``UPPER(prefix + "_" + name)`` with ``-`` as ``_``
    - **Flag owns parsing:** Values go through the flag's own converter
    - **Fail fast:** The first bad value stops the pass; nothing is rolled back

Key derivation::

    prefix "app", flag "config-file"
        normalize_prefix("app")   -> "app_"
        + "config-file"           -> "app_config-file"
        "-" -> "_", upper()       -> "APP_CONFIG_FILE"

Examples:
    >>> from overridefromenv import FlagSet, override
    >>> fs = FlagSet("demo")
    >>> port = fs.int("port", 8080)
    >>> override(fs, "APP", environ={"APP_PORT": "9090"})
    >>> port.value
    9090

Guardrails:
    - Parse arguments *before* overriding, otherwise every flag looks unset
      and the environment beats the command line.
    - The registry must not be mutated concurrently during the call.
    - When several flags hold bad values, which one is reported first is
      unspecified.

Tags:
    configuration, environment, flags, command-line, overridefromenv
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from overridefromenv import flagset
from overridefromenv.errors import ConversionError
from overridefromenv.registry import Flag, FlagRegistry

SEPARATOR = "_"


@dataclass(frozen=True)
class EnvBinding:
    """Where one flag would be read from, as reported by :func:`plan`."""

    flag: str
    env_key: str
    explicit: bool
    env_value: str | None = None

    @property
    def applies(self) -> bool:
        """True when an override pass would assign this flag."""
        return not self.explicit and self.env_value is not None


def normalize_prefix(prefix: str) -> str:
    """Append the separator to a non-empty *prefix* that lacks one."""
    if prefix and not prefix.endswith(SEPARATOR):
        return prefix + SEPARATOR
    return prefix


def env_key(prefix: str, name: str) -> str:
    """Environment variable consulted for flag *name* under *prefix*."""
    return (normalize_prefix(prefix) + name).replace("-", "_").upper()


def unset_flags(registry: FlagRegistry) -> list[Flag]:
    """Flags still holding their default.

    Registries expose "all flags" and "explicitly set flags" but never
    "unset flags", so this is the difference of the two, keyed by name.
    """
    unset = {flag.name: flag for flag in registry.all_flags()}
    for flag in registry.set_flags():
        unset.pop(flag.name, None)
    return list(unset.values())


def override(registry: FlagRegistry, prefix: str, environ: Mapping[str, str] | None = None) -> None:
    """Set unset flags in *registry* from the environment.

    Args:
        registry: Flag registry, already populated by argument parsing
        prefix: Key prefix; ``"APP"`` and ``"APP_"`` are equivalent, ``""``
            means no prefix
        environ: Mapping to read instead of ``os.environ``

    Raises:
        ConversionError: If an environment value is invalid for its flag.
            Flags assigned before the failing one keep their new values.
    """
    env = os.environ if environ is None else environ

    for flag in unset_flags(registry):
        key = env_key(prefix, flag.name)
        value = env.get(key)
        if value is None:
            continue
        try:
            registry.set(flag.name, value)
        except ValueError as exc:
            raise ConversionError(flag.name, key, value, cause=exc) from exc


def override_command_line(prefix: str, environ: Mapping[str, str] | None = None) -> None:
    """:func:`override` applied to :data:`overridefromenv.flagset.command_line`.

    ``overridefromenv.flagset.parse()`` must have run first. Called before
    parsing, every flag looks unset and environment values would be applied
    where the command line should have won. This is not checked.
    """
    override(flagset.command_line, prefix, environ)


def plan(registry: FlagRegistry, prefix: str, environ: Mapping[str, str] | None = None) -> list[EnvBinding]:
    """Report the key and environment value for every flag without assigning anything."""
    env = os.environ if environ is None else environ
    explicit = {flag.name for flag in registry.set_flags()}
    bindings = []
    for flag in registry.all_flags():
        key = env_key(prefix, flag.name)
        bindings.append(
            EnvBinding(
                flag=flag.name,
                env_key=key,
                explicit=flag.name in explicit,
                env_value=env.get(key),
            )
        )
    return bindings
