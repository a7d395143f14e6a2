"""Shared utility functions for CLI commands."""

import json
from pathlib import Path
from typing import TypeVar

import typer
from pydantic import BaseModel

from autocommit.llm import JSONParseError, validate_response

ModelT = TypeVar("ModelT", bound=BaseModel)

# Verbosity levels gating console output
LEVEL_SUMMARY = 1
LEVEL_PLAN = 2
LEVEL_CONTEXT = 3
LEVEL_RAW = 4


def log(verbosity: int, level: int, message: str, fg: str = "bright_black") -> None:
    """Print a message when the verbosity reaches the given level."""
    if verbosity >= level:
        typer.secho(message, fg=fg)


def echo_block(title: str, body: str) -> None:
    """Print a titled block with an indented, dimmed body."""
    typer.echo(title)
    for line in body.rstrip("\n").split("\n"):
        typer.secho(f"  {line}", fg="bright_black")


def error(message: str) -> None:
    typer.secho(message, fg="red", err=True)


def load_plan_file(path: Path, model_cls: type[ModelT]) -> ModelT:
    """Load a plan JSON file instead of asking the model.

    Args:
        path: Path to the JSON file.
        model_cls: Pydantic schema of the plan.

    Returns:
        The validated plan.

    Raises:
        JSONParseError: If the file is not valid JSON or does not match the schema.
    """
    try:
        parsed = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        raise JSONParseError(f"Failed to read plan from {path}: {e}")
    return validate_response(parsed, model_cls)


def colorize_diff(text: str) -> str:
    """Add ANSI color codes to diff lines like git diff.

    - Red for removed lines (-)
    - Green for added lines (+)
    - Cyan for hunk headers (@@)
    - Bold for diff/file header lines

    Args:
        text: Raw diff text.

    Returns:
        Colorized diff text with ANSI escape codes.
    """
    red = "\033[31m"
    green = "\033[32m"
    cyan = "\033[36m"
    bold = "\033[1m"
    reset = "\033[0m"

    colorized = []
    for line in text.split("\n"):
        if line.startswith("@@"):
            colorized.append(f"{cyan}{line}{reset}")
        elif line.startswith("---") or line.startswith("+++"):
            colorized.append(f"{bold}{line}{reset}")
        elif line.startswith("-"):
            colorized.append(f"{red}{line}{reset}")
        elif line.startswith("+"):
            colorized.append(f"{green}{line}{reset}")
        elif line.startswith("diff --git") or line.startswith("new file mode"):
            colorized.append(f"{bold}{line}{reset}")
        else:
            colorized.append(line)
    return "\n".join(colorized)
