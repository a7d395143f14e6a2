"""CLI entry point for autocommit.

This module provides the main CLI application that combines all commands
into a single unified interface.
"""

import typer

from autocommit.cli.commit import commit_command, run_autocommit
from autocommit.cli.rebase import rebase_command, run_autorebase
from autocommit.cli.main import main_command

# Main application
app = typer.Typer(
    name="autocommit",
    help="autocommit: AI-planned commits and history cleanup",
    add_completion=False,
)

# Add individual commands
app.command("commit")(commit_command)
app.command("rebase")(rebase_command)

# Set the main callback for default behavior (includes --version flag)
app.callback(invoke_without_command=True)(main_command)


__all__ = [
    "app",
    "commit_command",
    "rebase_command",
    "main_command",
    "run_autocommit",
    "run_autorebase",
]
