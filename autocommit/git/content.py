"""Pre-image and post-image readers for partial staging.

Contains:
- split_lines: Split file text into lines without a phantom trailing entry
- indexed_content: Lines of a path as recorded in the index
- working_tree_content: Lines of a path as it exists on disk
"""

from pathlib import Path
from typing import Optional

from autocommit.git.runner import _run_git_command


def split_lines(text: str) -> list[str]:
    """Split text on newlines, ignoring the terminator of the last line.

    Args:
        text: File contents.

    Returns:
        The lines, without their newline characters.
    """
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return lines


def indexed_content(repo_root: Path, path: str) -> Optional[list[str]]:
    """Read a file's lines from the index.

    The index may differ from HEAD when the file is already partially staged,
    so this is the correct pre-image for a patch applied with --cached.

    Args:
        repo_root: Repository root path.
        path: Repository-relative file path.

    Returns:
        The indexed lines, or None when the path is not in the index.
    """
    staged = _run_git_command(["ls-files", "--stage", "--", path], cwd=repo_root)
    if not staged:
        return None
    return split_lines(_run_git_command(["show", f":{path}"], strip=False, cwd=repo_root))


def working_tree_content(repo_root: Path, path: str) -> list[str]:
    """Read a file's lines from disk.

    Args:
        repo_root: Repository root path.
        path: Repository-relative file path.

    Returns:
        The file's lines; an empty list when the file has been deleted.
    """
    file_path = repo_root / path
    if not file_path.exists():
        return []
    return split_lines(file_path.read_text(encoding="utf-8", errors="replace"))
