"""
CLI layer for app-spine.

Provides a Typer application whose sub-commands delegate to the operations
layer (``app_spine.ops``).  All install logic lives in ops — this package
handles only terminal transport: argument parsing, prompts, coloured output
and event rendering.

Entry point::

    app-spine --help
"""

from app_spine.cli.app import app

__all__ = ["app"]
