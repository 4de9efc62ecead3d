"""
Command-line interface for visionhelpers.

This package contains CLI implementations using Click.
"""

from visionhelpers.cli.commands import cli, main

__all__ = ["cli", "main"]
