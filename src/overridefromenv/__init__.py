"""
overridefromenv: set unset command-line flags from environment variables.

Flags the user passed explicitly keep their values; every other flag is
looked up in the environment under ``UPPER(prefix + "_" + name)`` with ``-``
mapped to ``_``, and assigned through the flag's own parser when found.

Usage::

    from overridefromenv import flagset, override_command_line

    port = flagset.command_line.int("port", 8080, "server port")
    flagset.parse()                      # must come first
    override_command_line("APP")         # APP_PORT=9090 -> port.value == 9090

The core functions live in :mod:`overridefromenv.override`; the bundled
registry in :mod:`overridefromenv.flagset`; the click/typer adapter in
:mod:`overridefromenv.click_registry`.
"""

from overridefromenv import flagset
from overridefromenv.errors import (
    ConversionError,
    ErrorCategory,
    FlagError,
    FlagExistsError,
    FlagParseError,
    OverrideFromEnvError,
    UnknownFlagError,
)
from overridefromenv.flagset import FlagSet
from overridefromenv.override import (
    EnvBinding,
    env_key,
    normalize_prefix,
    override,
    override_command_line,
    plan,
    unset_flags,
)
from overridefromenv.registry import Flag, FlagRegistry

__version__ = "2.0.0"

__all__ = [
    # Core
    "override",
    "override_command_line",
    "env_key",
    "normalize_prefix",
    "unset_flags",
    "plan",
    "EnvBinding",
    # Registries
    "Flag",
    "FlagRegistry",
    "FlagSet",
    "flagset",
    # Errors
    "OverrideFromEnvError",
    "ErrorCategory",
    "ConversionError",
    "FlagError",
    "FlagExistsError",
    "UnknownFlagError",
    "FlagParseError",
]
