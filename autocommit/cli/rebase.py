"""CLI command that cleans up unpushed history with a compiled rebase."""

from pathlib import Path
from typing import Optional

import typer

from autocommit.config import Settings, load_settings
from autocommit.git import (
    GitError,
    ReadStatus,
    build_rebase_context,
    get_repo_root,
    get_unpushed_patches,
    read_unpushed_history,
)
from autocommit.global_config import GlobalConfigError
from autocommit.llm import LLMError, MissingAPIKeyError, get_provider, request_plan
from autocommit.rebase import (
    REBASE_SYSTEM_PROMPT,
    RebasePlan,
    RebasePlanError,
    UnknownCommitReferenceError,
    build_rebase_prompt,
    compile_rebase_plan,
    run_rebase,
)
from autocommit.cli.utils import (
    LEVEL_CONTEXT,
    LEVEL_PLAN,
    LEVEL_RAW,
    LEVEL_SUMMARY,
    echo_block,
    error,
    load_plan_file,
    log,
)


def run_autorebase(
    verbosity: int = 0,
    dry_run: bool = False,
    from_plan: Optional[Path] = None,
    settings: Optional[Settings] = None,
) -> bool:
    """Plan, compile and run a cleanup rebase of the unpushed commits.

    Args:
        verbosity: Output verbosity (0-4)
        dry_run: Print the compiled script instead of rebasing
        from_plan: Read the plan from this JSON file instead of the model
        settings: Settings for the model call (loaded when None)

    Returns:
        True if a rebase ran

    Raises:
        GitError: If a git command or the rebase fails
        LLMError: If the model call fails or its reply is unusable
        RebasePlanError: If the plan references unknown or ambiguous commits
    """
    repo_root = get_repo_root()

    if from_plan is not None:
        plan = load_plan_file(from_plan, RebasePlan)
    else:
        unpushed = get_unpushed_patches()
        if not unpushed.strip():
            log(verbosity, LEVEL_SUMMARY, "[autorebase] Nothing to rebase, skipping.")
            return False

        context = build_rebase_context(unpushed)
        if verbosity >= LEVEL_CONTEXT:
            echo_block("[autorebase] Git context:", context)

        provider = get_provider(settings or load_settings())
        user_prompt = build_rebase_prompt(context)
        if verbosity >= LEVEL_RAW:
            echo_block(f"[autorebase] AI request ({provider.model}):", user_prompt)

        plan, result = request_plan(provider, REBASE_SYSTEM_PROMPT, user_prompt, RebasePlan)
        if verbosity >= LEVEL_RAW:
            echo_block(
                f"[autorebase] Raw AI response ({result.input_tokens} in / {result.output_tokens} out tokens):",
                result.raw_response,
            )

    if verbosity >= LEVEL_PLAN:
        echo_block("[autorebase] AI Response:", plan.model_dump_json(indent=2))

    if not plan.rebases:
        log(verbosity, LEVEL_SUMMARY, "[autorebase] No rebase needed.")
        return False

    history = read_unpushed_history()
    if history.status != ReadStatus.OK:
        log(verbosity, LEVEL_SUMMARY, "[autorebase] No unpushed history to rebase, skipping.")
        return False

    log(
        verbosity,
        LEVEL_PLAN,
        f"[autorebase] Read {len(history.commits)} unpushed commit(s) ahead of {history.upstream}.",
    )

    script = compile_rebase_plan(history.commits, plan.rebases)
    if script.is_empty and script.dropped:
        typer.secho(
            f"[autorebase] Plan drops all {len(script.dropped)} commit(s) from "
            f"{script.dropped[0][:12]} onward; git cannot replay an empty todo, plan not applied.",
            fg="yellow",
            err=True,
        )
        return False
    if script.is_empty:
        log(verbosity, LEVEL_SUMMARY, "[autorebase] Plan contains less than 2 steps, skipping.")
        return False

    target = "--root" if script.onto_root else script.base
    if dry_run or verbosity >= LEVEL_CONTEXT:
        echo_block(f"[autorebase] Rebase sequence upon {target}:", script.to_text())
    if dry_run:
        typer.echo("[autorebase] Dry run, history unchanged.")
        return False

    run_rebase(repo_root, script)

    log(
        verbosity,
        LEVEL_SUMMARY,
        f"[autorebase] Replayed {len(script.directives)} commit(s) upon {target}.",
        fg="green",
    )
    return True


def rebase_command(
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
        help="Show the compiled rebase script without running it",
    ),
    from_plan: Optional[Path] = typer.Option(
        None,
        "--from-plan",
        help="Load the rebase plan JSON from a file instead of calling the model",
    ),
) -> None:
    """Squash, drop or reword unpushed commits as the model suggests."""
    try:
        run_autorebase(verbosity=verbose, dry_run=dry_run, from_plan=from_plan)
    except UnknownCommitReferenceError as e:
        report_unknown_commits(e)
        raise typer.Exit(1)
    except RebasePlanError as e:
        error(f"[autorebase] {e}")
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


def report_unknown_commits(exc: UnknownCommitReferenceError) -> None:
    """Print an unknown-commit failure with every offending sha."""
    error(f"[autorebase] {exc.prefix}:")
    for sha in exc.missing:
        typer.secho(f"- {sha}", fg="bright_black", err=True)
