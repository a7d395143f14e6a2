"""Rebase planning exception classes.

Contains:
- RebasePlanError: Base exception for rebase plans that cannot be compiled
- UnknownCommitReferenceError: A plan entry names a commit absent from history
- PlanRootNotFoundError: None of the plan's commits exist in history
- AmbiguousCommitReferenceError: An abbreviated sha matches several commits
"""


class RebasePlanError(Exception):
    """Base exception for rebase plans that cannot be compiled."""

    pass


class UnknownCommitReferenceError(RebasePlanError):
    """Raised when plan entries reference commits that are not in history."""

    prefix = "Rebase plan references commit(s) not found in history"

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(f"{self.prefix}: {', '.join(self.missing)}")


class PlanRootNotFoundError(UnknownCommitReferenceError):
    """Raised when none of the plan's commits exist, so there is no rebase root."""

    prefix = "None of the suggested rebase commits were found in history"


class AmbiguousCommitReferenceError(RebasePlanError):
    """Raised when an abbreviated sha matches more than one commit."""

    pass
