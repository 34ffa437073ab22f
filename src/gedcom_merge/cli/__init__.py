
"""
CLI package for gedcom_merge.

Provides the Typer application entrypoint and shared CLI utilities.
"""

from gedcom_merge.cli.app import app, main

__all__ = [
    "app",
    "main",
]
