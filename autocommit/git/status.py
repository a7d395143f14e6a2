"""Working tree status and log readers used to build model prompts.

Contains:
- get_status: Get git status output in porcelain format
- get_unstaged_diff: Get the diff between the index and the working tree
- get_untracked_files: Render untracked files with their contents
- get_recent_commits: Get the last n commits as "<sha> <subject>" lines
- get_head_commit_message: Get the full message of HEAD
- get_unpushed_patches: Get unpushed commits with their patches
"""

from pathlib import Path

from autocommit.git.runner import _run_git_command
from autocommit.git.exceptions import GitError

# Number of leading bytes inspected for binary detection (same window git uses)
BINARY_SNIFF_BYTES = 8000


def get_status() -> str:
    """Get git status output in porcelain format.

    Returns:
        The git status output.
    """
    return _run_git_command(["status", "--porcelain"])


def get_unstaged_diff() -> str:
    """Get the diff of tracked files between the index and the working tree.

    Hunk headers in this diff carry the line numbers the model refers to when
    it proposes partial staging.

    Returns:
        The unified diff text.
    """
    return _run_git_command(["diff"])


def _list_untracked_files() -> list[str]:
    output = _run_git_command(["ls-files", "--others", "--exclude-standard"])
    if not output:
        return []
    return [f for f in output.split("\n") if f.strip()]


def is_binary_file(path: Path) -> bool:
    """Check whether a file looks binary (NUL byte in its first block).

    Args:
        path: Path to the file.

    Returns:
        True if the file appears to be binary.
    """
    with open(path, "rb") as f:
        chunk = f.read(BINARY_SNIFF_BYTES)
    return b"\0" in chunk


def get_untracked_files(repo_root: Path) -> str:
    """Render every untracked file with its contents.

    Binary files are summarised as "(binary file)", symlinks as "(symlink)"
    and nested repositories as "(directory)". Code fences inside file
    contents are escaped so they cannot close the surrounding fence.

    Args:
        repo_root: Repository root path.

    Returns:
        A text block listing the untracked files, empty if there are none.
    """
    result = ""

    for file in _list_untracked_files():
        result += f"{file}:\n"
        path = repo_root / file

        # Checked before is_file(), which follows the link
        if path.is_symlink():
            result += "(symlink)\n"
        elif path.is_dir():
            result += "(directory)\n"
        elif not path.is_file():
            result += "(not a regular file)\n"
        elif is_binary_file(path):
            result += "(binary file)\n"
        else:
            contents = path.read_text(encoding="utf-8", errors="replace")
            result += "```\n"
            result += contents.replace("```", "``\\`") + "\n"
            result += "```\n\n"

    return result


def get_recent_commits(n: int = 10) -> list[str]:
    """Get the last n commits as "<sha> <subject>" lines.

    Args:
        n: Number of commits to retrieve.

    Returns:
        List of commit lines, newest first.
    """
    try:
        output = _run_git_command(["log", f"-n{n}", "--pretty=format:%H %s"])
    except GitError:
        # No commits yet in the repo
        return []
    if not output:
        return []
    return output.split("\n")


def get_head_commit_message() -> str:
    """Get the full message of the HEAD commit.

    Returns:
        The HEAD commit message, or an empty string when the repository has
        no commits yet.
    """
    try:
        return _run_git_command(["log", "-1", "--pretty=%B"])
    except GitError as e:
        if "does not have any commits yet" in str(e):
            return ""
        raise


def get_unpushed_patches() -> str:
    """Get unpushed commits (upstream..HEAD) with their patches.

    Returns:
        The log text, or an empty string when the branch has no upstream.
    """
    try:
        return _run_git_command(["log", "-p", "--pretty=format:%H %s", "@{u}..HEAD"])
    except GitError as e:
        message = str(e).lower()
        if "no upstream configured" in message or "no upstream branch" in message:
            return ""
        raise
