"""
Structured error types for overridefromenv.

Every error raised by this package extends ``OverrideFromEnvError`` and
carries a category, a context mapping and an optional chained cause, so the
host program can log it as structured data or render it for a user.

Architecture:
    ::

        ┌────────────────────────────────────────────────────────┐
        │                 OverrideFromEnvError                    │
        │            (category, context, cause)                   │
        ├────────────────────────────────────────────────────────┤
        │                                                         │
        │  ConversionError            FlagError                   │
        │  (CONVERSION)               (FLAG)                      │
        │                                 │                       │
        │                  FlagExistsError                        │
        │                  UnknownFlagError                       │
        │                  FlagParseError                         │
        └────────────────────────────────────────────────────────┘

Only ``ConversionError`` is raised by the override pass itself. The
``FlagError`` family belongs to the bundled ``FlagSet`` registry.

Examples:
    >>> err = ConversionError("port", "APP_PORT", "abc", cause=ValueError("bad int"))
    >>> err.env_key
    'APP_PORT'
    >>> err.to_dict()["category"]
    'CONVERSION'

Tags:
    error-handling, exception-hierarchy, overridefromenv
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error categories used for classification in logs."""

    CONVERSION = "CONVERSION"
    FLAG = "FLAG"
    INTERNAL = "INTERNAL"


class OverrideFromEnvError(Exception):
    """
    Base exception for all overridefromenv errors.

    Subclasses set ``default_category``. Extra metadata goes into
    ``context`` and the wrapped exception into ``cause`` (also chained as
    ``__cause__`` so tracebacks show it).
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = dict(context or {})
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> OverrideFromEnvError:
        """Add context to this error (fluent API)."""
        self.context.update(kwargs)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        if self.context:
            result["context"] = dict(self.context)
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONVERSION ERRORS
# =============================================================================


class ConversionError(OverrideFromEnvError):
    """
    An environment value could not be converted into a flag's type.

    Retrying cannot help: the same string will fail the same way. The
    override pass stops at the first one and does not roll back flags it
    already applied.
    """

    default_category = ErrorCategory.CONVERSION

    def __init__(self, flag_name: str, env_key: str, value: str, *, cause: Exception | None = None):
        self.flag_name = flag_name
        self.env_key = env_key
        self.value = value
        message = (
            f"unable to set flag {flag_name} from environment variable {env_key}, "
            f'which has a value of "{value}"'
        )
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(
            message,
            context={"flag": flag_name, "env_key": env_key, "value": value},
            cause=cause,
        )


# =============================================================================
# FLAG REGISTRY ERRORS
# =============================================================================


class FlagError(OverrideFromEnvError):
    """Misuse of a flag registry."""

    default_category = ErrorCategory.FLAG


class FlagExistsError(FlagError, ValueError):
    """A flag with this name is already registered."""

    def __init__(self, name: str, registry: str = ""):
        self.name = name
        where = f" in {registry}" if registry else ""
        super().__init__(f"flag redefined{where}: {name}", context={"flag": name})


class UnknownFlagError(FlagError, KeyError):
    """No flag with this name is registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"no such flag: {name}", context={"flag": name})

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message.
        return self.message


class FlagParseError(FlagError):
    """Command-line arguments could not be parsed into the flag set."""
