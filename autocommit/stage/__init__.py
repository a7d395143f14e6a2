"""Staging workflow for autocommit - stage files or hunks and commit.

This package provides:
- models: LineRange, Hunk, HunkSpec, FileChange, CommitPlan
- exceptions: MalformedRangeError
- patch: build_patch, validate_hunks
- executor: build_file_patch, apply_to_index, stage_file_change,
            create_commit, execute_commit_plan
- prompt: COMMIT_SYSTEM_PROMPT, build_commit_prompt
"""

# Models
from autocommit.stage.models import (
    CommitPlan,
    FileChange,
    Hunk,
    HunkSpec,
    LineRange,
)

# Exceptions
from autocommit.stage.exceptions import (
    MalformedRangeError,
)

# Patch builder
from autocommit.stage.patch import (
    build_patch,
    validate_hunks,
)

# Executor
from autocommit.stage.executor import (
    apply_to_index,
    build_file_patch,
    create_commit,
    execute_commit_plan,
    stage_file_change,
)

# Prompt
from autocommit.stage.prompt import (
    COMMIT_SYSTEM_PROMPT,
    build_commit_prompt,
)


__all__ = [
    # Models
    "LineRange",
    "Hunk",
    "HunkSpec",
    "FileChange",
    "CommitPlan",
    # Exceptions
    "MalformedRangeError",
    # Patch
    "build_patch",
    "validate_hunks",
    # Executor
    "build_file_patch",
    "apply_to_index",
    "stage_file_change",
    "create_commit",
    "execute_commit_plan",
    # Prompt
    "COMMIT_SYSTEM_PROMPT",
    "build_commit_prompt",
]
