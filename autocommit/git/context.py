"""Git context bundle builders.

Contains:
- build_commit_context: Context bundle for the commit planning prompt
- build_rebase_context: Context bundle for the rebase planning prompt
"""

from pathlib import Path

from autocommit.git.status import (
    get_head_commit_message,
    get_recent_commits,
    get_unstaged_diff,
    get_untracked_files,
)


def build_commit_context(repo_root: Path, status: str) -> str:
    """Build the context bundle for the commit planning prompt.

    Args:
        repo_root: Repository root path.
        status: Porcelain status already read by the caller.

    Returns:
        A formatted string containing all git context sections.
    """
    diff = get_unstaged_diff()
    untracked = get_untracked_files(repo_root)
    logs = get_recent_commits(n=10)
    head = get_head_commit_message()

    logs_formatted = "\n".join(logs) if logs else "(no commits yet)"

    bundle = f"""[GIT_STATUS]
{status.strip()}

[GIT_DIFF]
{diff.strip()}

[UNTRACKED_FILES]
{untracked.strip()}

[RECENT_GIT_LOGS]
{logs_formatted}

[CURRENT_HEAD_COMMIT_MESSAGE]
{head.strip()}"""

    return bundle


def build_rebase_context(unpushed_patches: str) -> str:
    """Build the context bundle for the rebase planning prompt.

    Args:
        unpushed_patches: Output of get_unpushed_patches().

    Returns:
        A formatted string containing the unpushed commits section.
    """
    return f"""[UNPUSHED_COMMITS]
{unpushed_patches.strip()}"""
