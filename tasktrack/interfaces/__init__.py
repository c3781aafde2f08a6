"""Interfaces layer for tasktrack.

This layer contains adapters for external interactions:
- CLI: Command-line interface using Typer

The interfaces layer is responsible for:
- Accepting user input
- Calling the task service
- Formatting output and mapping errors to exit codes
"""

from tasktrack.interfaces.cli import app

__all__ = ["app"]
