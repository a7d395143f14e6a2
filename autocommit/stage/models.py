"""Data models for the staging workflow.

Contains:
- LineRange: 1-based inclusive line range over a file's lines
- Hunk: Pair of old/new line ranges describing one change block
- HunkSpec: Hunk as returned by the model (flat start/end fields)
- FileChange: A file to stage, whole or by hunks
- CommitPlan: The full commit plan returned by the model
"""

from dataclasses import dataclass
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field


@dataclass(frozen=True)
class LineRange:
    """1-based inclusive line range.

    A range with start == 0 or end < start is absent (pure insertion or pure
    deletion on that side).
    """

    start: int
    end: int

    @property
    def is_absent(self) -> bool:
        return self.start == 0 or self.end < self.start

    @property
    def is_malformed(self) -> bool:
        return self.start < 0 or self.end < 0

    def take(self, lines: list[str]) -> list[str]:
        """Slice the lines covered by this range (empty when absent)."""
        if self.is_absent:
            return []
        return lines[self.start - 1:self.end]


@dataclass(frozen=True)
class Hunk:
    """One contiguous change block addressed by pre-image/post-image ranges."""

    old: LineRange
    new: LineRange

    @property
    def is_noop(self) -> bool:
        return self.old.is_absent and self.new.is_absent


class HunkSpec(BaseModel):
    """Hunk ranges as they appear in the model's JSON response.

    Both snake_case and camelCase keys are accepted.
    """

    old_start: int = Field(validation_alias=AliasChoices("old_start", "oldStart"))
    old_end: int = Field(validation_alias=AliasChoices("old_end", "oldEnd"))
    new_start: int = Field(validation_alias=AliasChoices("new_start", "newStart"))
    new_end: int = Field(validation_alias=AliasChoices("new_end", "newEnd"))

    def to_hunk(self) -> Hunk:
        return Hunk(
            old=LineRange(self.old_start, self.old_end),
            new=LineRange(self.new_start, self.new_end),
        )

    def describe(self) -> str:
        """Short post-image range label, e.g. "12-18"."""
        return f"{self.new_start}-{self.new_end}"


class FileChange(BaseModel):
    """A file to stage. No hunks means the whole file."""

    path: str
    hunks: Optional[list[HunkSpec]] = None

    @property
    def stages_whole_file(self) -> bool:
        return not self.hunks

    def describe(self) -> str:
        """Label used in verbose output, e.g. "src/app.py:3-5,10-12"."""
        if self.stages_whole_file:
            return self.path
        return f"{self.path}:{','.join(h.describe() for h in self.hunks)}"


class CommitPlan(BaseModel):
    """The commit plan returned by the model."""

    files: list[FileChange] = []
    commit_message: Optional[str] = None
    amend: bool = False

    @property
    def is_actionable(self) -> bool:
        return bool(self.files) and bool(self.commit_message and self.commit_message.strip())
