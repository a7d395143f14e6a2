"""Git access layer for autocommit.

This package provides:
- exceptions: GitError, PatchApplyError, RebaseExecutionError
- runner: _run_git_command, get_repo_root
- status: get_status, get_unstaged_diff, get_untracked_files,
          get_recent_commits, get_head_commit_message, get_unpushed_patches
- history: ReadStatus, HistoryRead, read_unpushed_history, get_commit_subject
- content: indexed_content, working_tree_content, split_lines
- context: build_commit_context, build_rebase_context
"""

# Exceptions
from autocommit.git.exceptions import (
    GitError,
    PatchApplyError,
    RebaseExecutionError,
)

# Runner utilities
from autocommit.git.runner import (
    _run_git_command,
    get_repo_root,
)

# Status utilities
from autocommit.git.status import (
    get_head_commit_message,
    get_recent_commits,
    get_status,
    get_unpushed_patches,
    get_unstaged_diff,
    get_untracked_files,
    is_binary_file,
)

# History utilities
from autocommit.git.history import (
    HistoryRead,
    ReadStatus,
    get_commit_subject,
    get_upstream_ref,
    parse_log_records,
    read_unpushed_history,
)

# Content readers
from autocommit.git.content import (
    indexed_content,
    split_lines,
    working_tree_content,
)

# Context bundle builders
from autocommit.git.context import (
    build_commit_context,
    build_rebase_context,
)


__all__ = [
    # Exceptions
    "GitError",
    "PatchApplyError",
    "RebaseExecutionError",
    # Runner
    "_run_git_command",
    "get_repo_root",
    # Status
    "get_status",
    "get_unstaged_diff",
    "get_untracked_files",
    "is_binary_file",
    "get_recent_commits",
    "get_head_commit_message",
    "get_unpushed_patches",
    # History
    "ReadStatus",
    "HistoryRead",
    "get_upstream_ref",
    "parse_log_records",
    "read_unpushed_history",
    "get_commit_subject",
    # Content
    "split_lines",
    "indexed_content",
    "working_tree_content",
    # Context
    "build_commit_context",
    "build_rebase_context",
]
