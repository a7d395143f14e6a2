"""Default CLI behavior: commit the working tree, then tidy unpushed history."""

from typing import Optional

import typer

from autocommit import __version__
from autocommit.config import load_settings
from autocommit.git import GitError
from autocommit.global_config import GlobalConfigError
from autocommit.llm import LLMError, MissingAPIKeyError
from autocommit.rebase import RebasePlanError, UnknownCommitReferenceError
from autocommit.stage import MalformedRangeError
from autocommit.cli.commit import run_autocommit
from autocommit.cli.rebase import report_unknown_commits, run_autorebase
from autocommit.cli.utils import error


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"autocommit {__version__}")
        raise typer.Exit()


def main_command(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase output verbosity (repeat up to -vvvv)",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would happen without staging, committing or rebasing",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Commit the working tree, then clean up unpushed commits."""
    # If a subcommand is invoked, don't run the default behavior
    if ctx.invoked_subcommand is not None:
        return

    try:
        settings = load_settings()
        run_autocommit(verbosity=verbose, dry_run=dry_run, settings=settings)
        run_autorebase(verbosity=verbose, dry_run=dry_run, settings=settings)
    except UnknownCommitReferenceError as e:
        report_unknown_commits(e)
        raise typer.Exit(1)
    except RebasePlanError as e:
        error(f"[autorebase] {e}")
        raise typer.Exit(1)
    except MalformedRangeError as e:
        error(f"Invalid plan: {e}")
        raise typer.Exit(1)
    except GitError as e:
        error(f"Git error: {e}")
        raise typer.Exit(1)
    except MissingAPIKeyError as e:
        error(f"Error: {e}")
        raise typer.Exit(1)
    except LLMError as e:
        error(f"LLM error: {e}")
        raise typer.Exit(1)
    except GlobalConfigError as e:
        error(f"Config error: {e}")
        raise typer.Exit(1)
