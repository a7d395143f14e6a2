"""CLI command that stages one planned change and commits it."""

from pathlib import Path
from typing import Optional

import typer

from autocommit.config import Settings, load_settings
from autocommit.git import (
    GitError,
    build_commit_context,
    get_repo_root,
    get_status,
)
from autocommit.global_config import GlobalConfigError
from autocommit.llm import LLMError, MissingAPIKeyError, get_provider, request_plan
from autocommit.stage import (
    COMMIT_SYSTEM_PROMPT,
    CommitPlan,
    MalformedRangeError,
    build_commit_prompt,
    build_file_patch,
    execute_commit_plan,
)
from autocommit.cli.utils import (
    LEVEL_CONTEXT,
    LEVEL_PLAN,
    LEVEL_RAW,
    LEVEL_SUMMARY,
    colorize_diff,
    echo_block,
    error,
    load_plan_file,
    log,
)


def run_autocommit(
    verbosity: int = 0,
    dry_run: bool = False,
    from_plan: Optional[Path] = None,
    settings: Optional[Settings] = None,
) -> bool:
    """Plan, stage and create one commit from the working tree.

    Args:
        verbosity: Output verbosity (0-4)
        dry_run: Print the patches and message instead of committing
        from_plan: Read the plan from this JSON file instead of the model
        settings: Settings for the model call (loaded when None)

    Returns:
        True if a commit was created

    Raises:
        GitError: If a git command fails
        LLMError: If the model call fails or its reply is unusable
        MalformedRangeError: If the plan contains a malformed hunk range
    """
    repo_root = get_repo_root()

    status = get_status()
    if not status.strip():
        log(verbosity, LEVEL_SUMMARY, "[autocommit] No changes to commit.")
        return False

    if from_plan is not None:
        plan = load_plan_file(from_plan, CommitPlan)
    else:
        context = build_commit_context(repo_root, status)
        if verbosity >= LEVEL_CONTEXT:
            echo_block("[autocommit] Git context:", context)

        provider = get_provider(settings or load_settings())
        user_prompt = build_commit_prompt(context)
        if verbosity >= LEVEL_RAW:
            echo_block(f"[autocommit] AI request ({provider.model}):", user_prompt)

        plan, result = request_plan(provider, COMMIT_SYSTEM_PROMPT, user_prompt, CommitPlan)
        if verbosity >= LEVEL_RAW:
            echo_block(
                f"[autocommit] Raw AI response ({result.input_tokens} in / {result.output_tokens} out tokens):",
                result.raw_response,
            )

    if verbosity >= LEVEL_PLAN:
        echo_block("[autocommit] AI Response:", plan.model_dump_json(indent=2))

    if not plan.is_actionable:
        log(verbosity, LEVEL_SUMMARY, "[autocommit] No meaningful commit can be made, skipping.")
        return False

    if dry_run:
        typer.echo("[autocommit] Dry run, nothing staged.")
        for change in plan.files:
            if change.stages_whole_file:
                typer.echo(f"Would stage whole file: {change.path}")
                continue
            patch_content = build_file_patch(repo_root, change)
            if patch_content:
                typer.echo(colorize_diff(patch_content.rstrip("\n")))
        echo_block("Commit message:", plan.commit_message)
        return False

    staged = execute_commit_plan(repo_root, plan)

    if verbosity >= LEVEL_SUMMARY:
        subject = plan.commit_message.strip().split("\n", 1)[0]
        typer.secho(f"[autocommit] {subject}", fg="green")
        if verbosity >= LEVEL_PLAN:
            for change in staged:
                typer.secho(f"  - {change.describe()}", fg="bright_black")

    return True


def commit_command(
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
        help="Show the patches and message without staging or committing",
    ),
    from_plan: Optional[Path] = typer.Option(
        None,
        "--from-plan",
        help="Load the commit plan JSON from a file instead of calling the model",
    ),
) -> None:
    """Stage one coherent change from the working tree and commit it."""
    try:
        run_autocommit(verbosity=verbose, dry_run=dry_run, from_plan=from_plan)
    except GitError as e:
        error(f"Git error: {e}")
        raise typer.Exit(1)
    except MalformedRangeError as e:
        error(f"Invalid plan: {e}")
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
