"""Rebase workflow for autocommit - compile and run history cleanups.

This package provides:
- models: REBASE_ROOT, RebaseActionType, Commit, RebaseAction, RebasePlan, RebaseScript
- exceptions: RebasePlanError, UnknownCommitReferenceError,
              PlanRootNotFoundError, AmbiguousCommitReferenceError
- compiler: compile_rebase_plan, resolve_commit_index
- executor: build_editor_env, pick_comment_char, run_rebase
- prompt: REBASE_SYSTEM_PROMPT, build_rebase_prompt
"""

# Models
from autocommit.rebase.models import (
    REBASE_ROOT,
    Commit,
    RebaseAction,
    RebaseActionType,
    RebasePlan,
    RebaseScript,
)

# Exceptions
from autocommit.rebase.exceptions import (
    AmbiguousCommitReferenceError,
    PlanRootNotFoundError,
    RebasePlanError,
    UnknownCommitReferenceError,
)

# Compiler
from autocommit.rebase.compiler import (
    compile_rebase_plan,
    resolve_commit_index,
)

# Executor
from autocommit.rebase.executor import (
    build_editor_env,
    pick_comment_char,
    run_rebase,
)

# Prompt
from autocommit.rebase.prompt import (
    REBASE_SYSTEM_PROMPT,
    build_rebase_prompt,
)


__all__ = [
    # Models
    "REBASE_ROOT",
    "RebaseActionType",
    "Commit",
    "RebaseAction",
    "RebasePlan",
    "RebaseScript",
    # Exceptions
    "RebasePlanError",
    "UnknownCommitReferenceError",
    "PlanRootNotFoundError",
    "AmbiguousCommitReferenceError",
    # Compiler
    "compile_rebase_plan",
    "resolve_commit_index",
    # Executor
    "build_editor_env",
    "pick_comment_char",
    "run_rebase",
    # Prompt
    "REBASE_SYSTEM_PROMPT",
    "build_rebase_prompt",
]
