"""Patch builder for partial staging.

Contains:
- build_patch: Build a unified-diff patch for selected hunks of one file
- validate_hunks: Reject malformed hunk ranges before assembly

The hunk body is a positional pairing of the old and new slices, not a
minimal edit script: line i of the old slice is compared with line i of the
new slice. It is only correct when the caller's ranges describe an aligned
before/after pair.
"""

from typing import Optional

from autocommit.stage.exceptions import MalformedRangeError
from autocommit.stage.models import Hunk

DEV_NULL = "/dev/null"
NEW_FILE_MODE = "100644"


def validate_hunks(path: str, hunks: list[Hunk]) -> None:
    """Reject hunks whose ranges have negative bounds.

    Args:
        path: File path (for error messages)
        hunks: Hunks to check

    Raises:
        MalformedRangeError: If any range is malformed
    """
    for index, hunk in enumerate(hunks):
        for side, rng in (("old", hunk.old), ("new", hunk.new)):
            if rng.is_malformed:
                raise MalformedRangeError(
                    f"{path}: hunk {index + 1} has a malformed {side} range "
                    f"({rng.start}-{rng.end})"
                )


def _hunk_body(old_slice: list[str], new_slice: list[str]) -> list[str]:
    body: list[str] = []
    for i in range(max(len(old_slice), len(new_slice))):
        old = old_slice[i] if i < len(old_slice) else None
        new = new_slice[i] if i < len(new_slice) else None
        if old is None:
            body.append(f"+{new}")
        elif new is None:
            body.append(f"-{old}")
        elif old != new:
            body.append(f"-{old}")
            body.append(f"+{new}")
        else:
            body.append(f" {old}")
    return body


def _hunk_block(hunk: Hunk, old_lines: list[str], new_lines: list[str], is_new_file: bool) -> str:
    old_slice = hunk.old.take(old_lines)
    new_slice = hunk.new.take(new_lines)

    # A new file has no pre-image, git expects "-0,0"
    old_start = 0 if is_new_file and not old_slice else hunk.old.start
    header = f"@@ -{old_start},{len(old_slice)} +{hunk.new.start},{len(new_slice)} @@"

    return "\n".join([header] + _hunk_body(old_slice, new_slice))


def build_patch(
    path: str,
    old_lines: Optional[list[str]],
    new_lines: list[str],
    hunks: list[Hunk],
) -> str:
    """Build a unified-diff patch containing only the given hunks.

    Args:
        path: Repository-relative file path
        old_lines: Pre-image lines from the index, or None for a new file
        new_lines: Post-image lines from the working tree
        hunks: Hunks to include, each applied independently

    Returns:
        Patch text ending in exactly one newline

    Raises:
        MalformedRangeError: If a hunk range has negative bounds
    """
    validate_hunks(path, hunks)

    is_new_file = old_lines is None
    pre_image = old_lines or []

    header_lines = [f"diff --git a/{path} b/{path}"]
    if is_new_file:
        header_lines.append(f"new file mode {NEW_FILE_MODE}")
    header_lines.append(f"--- {DEV_NULL if is_new_file else f'a/{path}'}")
    header_lines.append(f"+++ b/{path}")

    blocks = [_hunk_block(hunk, pre_image, new_lines, is_new_file) for hunk in hunks]

    patch = "\n".join(header_lines + blocks)

    # git apply requires the patch to end with a newline
    return patch.rstrip("\n") + "\n"
