"""
CLI layer for overridefromenv.

Provides a Typer application that delegates to the library functions in
``overridefromenv.override``. This package handles only terminal transport:
argument parsing, coloured output, and table formatting.

Entry point::

    overridefromenv --help
"""

from overridefromenv.cli.app import app

__all__ = ["app"]
