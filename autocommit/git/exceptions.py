"""Git-related exception classes.

Contains all exception classes for Git operations:
- GitError: Base exception for git-related errors
- PatchApplyError: Raised when a synthesized patch cannot be applied to the index
- RebaseExecutionError: Raised when git fails to run a compiled rebase script
"""


class GitError(Exception):
    """Custom exception for git-related errors."""

    pass


class PatchApplyError(GitError):
    """Raised when `git apply --cached` rejects a patch."""

    pass


class RebaseExecutionError(GitError):
    """Raised when `git rebase` stops or fails while replaying a script."""

    pass
