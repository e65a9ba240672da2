"""
CLI layer for guidebook.

Provides a Typer application whose commands delegate to the content and
lint packages. This package handles only terminal transport: argument
parsing, coloured output, and table formatting.

Entry point::

    guidebook --help
"""

from guidebook.cli.app import app

__all__ = ["app"]
