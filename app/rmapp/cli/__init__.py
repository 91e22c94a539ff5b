"""CLI package for rmapp.

This package contains the Typer application.
"""

from rmapp.cli.main import app

__all__ = ["app"]
