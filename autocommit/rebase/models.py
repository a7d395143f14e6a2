"""Data models for the rebase workflow.

Contains:
- RebaseActionType: pick / reword / drop / squash
- Commit: A commit on the linear unpushed history
- RebaseAction: One per-commit action proposed by the model
- RebasePlan: The full rebase plan returned by the model
- RebaseScript: Compiled rebase todo plus the base to rebase onto
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from pydantic import BaseModel

# Base sentinel for a rebase that starts at the repository's first commit
REBASE_ROOT = "root"


class RebaseActionType(str, Enum):
    """Supported rebase todo commands."""

    PICK = "pick"
    REWORD = "reword"
    DROP = "drop"
    SQUASH = "squash"


@dataclass
class Commit:
    """A commit on the linear history being rebased."""

    sha: str
    subject: str
    parent: Optional[str] = None  # None for the repository's first commit


class RebaseAction(BaseModel):
    """A single action proposed for one commit."""

    commit: str
    action: RebaseActionType
    message: Optional[str] = None


class RebasePlan(BaseModel):
    """The rebase plan returned by the model."""

    rebases: list[RebaseAction] = []


@dataclass
class RebaseScript:
    """A compiled rebase todo.

    `messages` maps full commit shas to the message a `reword` step must
    write; rewords without an entry keep the commit's existing message.
    `dropped` lists the shas the walk left out, oldest first.
    """

    base: Optional[str] = None
    directives: list[str] = field(default_factory=list)
    messages: dict[str, str] = field(default_factory=dict)
    dropped: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.directives

    @property
    def onto_root(self) -> bool:
        return self.base == REBASE_ROOT

    def to_text(self) -> str:
        """Render the todo, one directive per line with a trailing newline."""
        if not self.directives:
            return ""
        return "\n".join(self.directives) + "\n"
