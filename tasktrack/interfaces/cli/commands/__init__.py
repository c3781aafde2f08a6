"""CLI command groups for tasktrack.

This package contains command groups that are registered with the
main Typer app using app.add_typer().

Command groups:
- task: Task lifecycle (add, list, show, update, delete, start, done, stop, archive, current)
"""

from tasktrack.interfaces.cli.commands import task

__all__ = ["task"]
