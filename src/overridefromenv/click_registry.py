"""
Flag registry adapter for click (and typer) contexts.

click records where each parameter value came from in
``ctx.get_parameter_source()``. Anything that did not come from a default is
treated as explicitly set, so the override pass only fills in parameters the
user left alone.

Usage::

    @click.command()
    @click.option("--port", type=int, default=8080)
    @click.pass_context
    def serve(ctx, port):
        override_context(ctx, "APP")
        port = ctx.params["port"]

``typer.Context`` is a ``click.Context``, so the same call works from a typer
command that takes a ``ctx: typer.Context`` argument.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import click
from click.core import ParameterSource

from overridefromenv.errors import UnknownFlagError
from overridefromenv.override import override
from overridefromenv.registry import Flag

_EXPLICIT_SOURCES = frozenset(
    {ParameterSource.COMMANDLINE, ParameterSource.ENVIRONMENT, ParameterSource.PROMPT}
)


class ClickRegistry:
    """Expose the parameters of a ``click.Context`` as a flag registry."""

    def __init__(self, ctx: click.Context):
        self.ctx = ctx
        self._params: dict[str, click.Parameter] = {
            param.name: param
            for param in ctx.command.params
            if param.name is not None and param.name in ctx.params
        }

    def _flag(self, param: click.Parameter) -> Flag:
        name = param.name or ""
        return Flag(
            name=name,
            value=self.ctx.params.get(name),
            default=param.default,
            parser=lambda raw, _param=param: self._convert(_param, raw),
            usage=getattr(param, "help", None) or "",
        )

    def all_flags(self) -> list[Flag]:
        return [self._flag(param) for param in self._params.values()]

    def set_flags(self) -> list[Flag]:
        return [
            self._flag(param)
            for name, param in self._params.items()
            if self.ctx.get_parameter_source(name) in _EXPLICIT_SOURCES
        ]

    def set(self, name: str, value: str) -> None:
        """Convert *value* with the parameter's click type and store it.

        Raises:
            UnknownFlagError: If the command has no parameter *name*
            ValueError: If click rejects the value
        """
        param = self._params.get(name)
        if param is None:
            raise UnknownFlagError(name)
        self.ctx.params[name] = self._convert(param, value)
        self.ctx.set_parameter_source(name, ParameterSource.ENVIRONMENT)

    def _convert(self, param: click.Parameter, value: str) -> Any:
        raw: Any = value
        if param.nargs != 1 or getattr(param, "multiple", False):
            raw = param.type.split_envvar_value(value)
        try:
            return param.type_cast_value(self.ctx, raw)
        except click.BadParameter as exc:
            raise ValueError(exc.format_message()) from exc


def override_context(ctx: click.Context, prefix: str, environ: Mapping[str, str] | None = None) -> None:
    """Fill unset parameters of *ctx* from the environment.

    Raises:
        ConversionError: If an environment value is rejected by click
    """
    override(ClickRegistry(ctx), prefix, environ)
