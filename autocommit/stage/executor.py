"""Executor for the staging workflow.

Contains:
- build_file_patch: Read pre/post images and build the patch for one file
- apply_to_index: Apply patch text to the index
- stage_file_change: Stage one FileChange, whole or by hunks
- create_commit: Commit whatever is staged
- execute_commit_plan: Stage every file of a CommitPlan and commit it
"""

import os
import subprocess
import tempfile
from pathlib import Path

from autocommit.git.content import indexed_content, working_tree_content
from autocommit.git.exceptions import GitError, PatchApplyError
from autocommit.stage.models import CommitPlan, FileChange
from autocommit.stage.patch import build_patch


def build_file_patch(repo_root: Path, change: FileChange) -> str:
    """Build the partial-staging patch for one file.

    Hunks whose ranges are both absent are no-ops and are left out.

    Args:
        repo_root: Repository root path
        change: File change with at least one hunk

    Returns:
        Patch text, or an empty string when every hunk is a no-op
    """
    hunks = [spec.to_hunk() for spec in change.hunks or []]
    hunks = [hunk for hunk in hunks if not hunk.is_noop]
    if not hunks:
        return ""

    old_lines = indexed_content(repo_root, change.path)
    new_lines = working_tree_content(repo_root, change.path)
    return build_patch(change.path, old_lines, new_lines, hunks)


def apply_to_index(repo_root: Path, patch_content: str) -> None:
    """Apply a patch to the index only.

    --unidiff-zero lets git accept hunks that carry no context lines, which
    is what a pure insertion or deletion range produces.

    Args:
        repo_root: Repository root path
        patch_content: Patch text

    Raises:
        PatchApplyError: If git rejects the patch (stderr included verbatim)
    """
    fd, patch_path = tempfile.mkstemp(prefix="autocommit_", suffix=".patch")
    try:
        with os.fdopen(fd, "w") as f:
            f.write(patch_content)

        result = subprocess.run(
            ["git", "apply", "--cached", "--unidiff-zero", patch_path],
            capture_output=True,
            text=True,
            cwd=repo_root,
        )
        if result.returncode != 0:
            raise PatchApplyError(f"Failed to apply patch:\n{result.stderr}")
    finally:
        try:
            os.remove(patch_path)
        except OSError:
            pass


def stage_file_change(repo_root: Path, change: FileChange) -> bool:
    """Stage one file change.

    Args:
        repo_root: Repository root path
        change: The file change to stage

    Returns:
        True if something was handed to git, False if every hunk was a no-op

    Raises:
        GitError: If `git add` fails
        PatchApplyError: If the partial patch does not apply
    """
    if change.stages_whole_file:
        # -A stages deletions too
        result = subprocess.run(
            ["git", "add", "-A", "--", change.path],
            capture_output=True,
            text=True,
            cwd=repo_root,
        )
        if result.returncode != 0:
            raise GitError(f"Failed to stage {change.path}:\n{result.stderr}")
        return True

    patch_content = build_file_patch(repo_root, change)
    if not patch_content:
        return False

    apply_to_index(repo_root, patch_content)
    return True


def create_commit(repo_root: Path, message: str, amend: bool = False) -> None:
    """Commit the index.

    Args:
        repo_root: Repository root path
        message: Commit message
        amend: Amend HEAD instead of creating a new commit

    Raises:
        GitError: If the commit fails
    """
    args = ["git", "commit", "-m", message]
    if amend:
        args.extend(["--amend", "--no-edit"])

    result = subprocess.run(args, capture_output=True, text=True, cwd=repo_root)
    if result.returncode != 0:
        raise GitError(f"Failed to commit:\n{result.stderr or result.stdout}")


def execute_commit_plan(repo_root: Path, plan: CommitPlan) -> list[FileChange]:
    """Stage every file of the plan and create the commit.

    Stops at the first failure; files staged before it stay staged.

    Args:
        repo_root: Repository root path
        plan: An actionable commit plan

    Returns:
        The file changes that were staged

    Raises:
        GitError: If staging or committing fails
    """
    staged = []
    for change in plan.files:
        if stage_file_change(repo_root, change):
            staged.append(change)

    create_commit(repo_root, plan.commit_message, amend=plan.amend)
    return staged
