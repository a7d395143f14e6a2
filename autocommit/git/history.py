"""Linear history reader for the rebase workflow.

Contains:
- ReadStatus: Outcome of a history read
- HistoryRead: Commits read from the unpushed range, with status
- read_unpushed_history: Read upstream..HEAD oldest -> newest
- get_commit_subject: Get the subject line of a single commit
"""

from dataclasses import dataclass, field
from enum import Enum

from autocommit.git.runner import _run_git_command
from autocommit.git.exceptions import GitError
from autocommit.rebase.models import Commit

# Field and record separators for `git log --format`
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
_LOG_FORMAT = "%H%x1f%P%x1f%s%x1e"


class ReadStatus(Enum):
    """Outcome of reading history."""

    OK = "ok"
    EMPTY = "empty"  # Upstream exists but nothing is unpushed
    NOT_FOUND = "not_found"  # No upstream configured or no commits at all


@dataclass
class HistoryRead:
    """Commits read from the unpushed range."""

    status: ReadStatus
    commits: list[Commit] = field(default_factory=list)
    upstream: str = ""


def get_upstream_ref() -> str:
    """Return the upstream ref of the current branch, or "" when absent."""
    try:
        return _run_git_command(["rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{u}"])
    except GitError:
        return ""


def parse_log_records(raw: str) -> list[Commit]:
    """Parse `git log` output produced with the separator format.

    Args:
        raw: Output of `git log --format=%H%x1f%P%x1f%s%x1e`.

    Returns:
        Parsed commits in the order git printed them.
    """
    commits = []
    for record in raw.split(_RECORD_SEP):
        # str.strip() would also eat the separators, which count as whitespace
        record = record.strip("\n")
        if not record:
            continue
        parts = record.split(_FIELD_SEP)
        if len(parts) < 3:
            continue
        parents = parts[1].split()
        commits.append(
            Commit(
                sha=parts[0].strip(),
                subject=parts[2].strip(),
                parent=parents[0] if parents else None,
            )
        )
    return commits


def read_unpushed_history() -> HistoryRead:
    """Read the unpushed commits of the current branch, oldest first.

    Only the first-parent chain is followed, so the result is always linear.

    Returns:
        A HistoryRead. NOT_FOUND when there is no upstream, EMPTY when the
        branch is level with its upstream.
    """
    upstream = get_upstream_ref()
    if not upstream:
        return HistoryRead(status=ReadStatus.NOT_FOUND)

    raw = _run_git_command(
        ["log", "--reverse", "--first-parent", f"--format={_LOG_FORMAT}", f"{upstream}..HEAD"],
        strip=False,
    )
    commits = parse_log_records(raw)
    if not commits:
        return HistoryRead(status=ReadStatus.EMPTY, upstream=upstream)
    return HistoryRead(status=ReadStatus.OK, commits=commits, upstream=upstream)


def get_commit_subject(sha: str) -> str:
    """Get the subject line of a commit."""
    return _run_git_command(["show", "-s", "--format=%s", sha])
