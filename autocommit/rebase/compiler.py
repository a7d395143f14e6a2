"""Rebase plan compiler.

Contains:
- resolve_commit_index: Find a (possibly abbreviated) sha in history
- compile_rebase_plan: Turn a sparse plan into a complete linear rebase todo

The compiler walks history in its original order and looks up the plan entry
for each commit, so the relative order of retained commits never changes.
Commits the plan does not mention are kept as picks, a leading squash is
downgraded to a pick, and plan entries that imply reordering are ignored.
"""

import uuid
from typing import Callable, Optional

from autocommit.rebase.exceptions import (
    AmbiguousCommitReferenceError,
    PlanRootNotFoundError,
    UnknownCommitReferenceError,
)
from autocommit.rebase.models import (
    REBASE_ROOT,
    Commit,
    RebaseAction,
    RebaseActionType,
    RebaseScript,
)

# Shortest abbreviation git itself accepts
MIN_ABBREV_LENGTH = 4


def _placeholder_message() -> str:
    return f"autocommit-{uuid.uuid4().hex}"


def resolve_commit_index(ref: str, history: list[Commit]) -> Optional[int]:
    """Find the index of a commit reference in history.

    Full shas match exactly; abbreviations of at least MIN_ABBREV_LENGTH
    characters match the unique commit they prefix.

    Args:
        ref: Commit sha or abbreviation from the plan
        history: Commits oldest -> newest

    Returns:
        The index in history, or None if the reference matches nothing

    Raises:
        AmbiguousCommitReferenceError: If an abbreviation matches several commits
    """
    needle = ref.strip().lower()
    for index, commit in enumerate(history):
        if commit.sha.lower() == needle:
            return index

    if len(needle) < MIN_ABBREV_LENGTH:
        return None

    matches = [i for i, commit in enumerate(history) if commit.sha.lower().startswith(needle)]
    if len(matches) > 1:
        raise AmbiguousCommitReferenceError(
            f"Commit reference {ref} matches {len(matches)} commits: "
            + ", ".join(history[i].sha for i in matches)
        )
    return matches[0] if matches else None


def _resolve_message(
    action: Optional[RebaseAction],
    commit: Commit,
    placeholder: Callable[[], str],
) -> str:
    if action is not None and action.message and action.message.strip():
        return action.message.strip()
    if commit.subject.strip():
        return commit.subject.strip()
    return placeholder()


def _directive(kind: RebaseActionType, commit: Commit, message: str) -> str:
    # The todo format is one line per step; only the subject fits
    label = message.split("\n", 1)[0].strip()
    return f"{kind.value} {commit.sha} {label}"


def compile_rebase_plan(
    history: list[Commit],
    plan: list[RebaseAction],
    placeholder: Callable[[], str] = _placeholder_message,
) -> RebaseScript:
    """Compile a sparse rebase plan into a complete rebase todo.

    Args:
        history: Linear history oldest -> newest, covering every commit the
            plan may reference
        plan: Proposed per-commit actions; may omit commits, and when
            several entries name the same commit the last one wins
        placeholder: Factory for a unique message when neither the plan nor
            the commit provides one

    Returns:
        A RebaseScript. Its directives are empty when the plan is empty or
        touches at most one commit, and when it drops every commit from its
        oldest entry onward (see `dropped`).

    Raises:
        PlanRootNotFoundError: If none of the plan's commits are in history
        UnknownCommitReferenceError: If some of the plan's commits are not in history
        AmbiguousCommitReferenceError: If an abbreviated sha matches several commits
    """
    if not plan:
        return RebaseScript()

    actions: dict[str, RebaseAction] = {}
    located: list[int] = []
    missing: list[str] = []

    for action in plan:
        index = resolve_commit_index(action.commit, history)
        if index is None:
            missing.append(action.commit)
            continue
        located.append(index)
        actions[history[index].sha] = action

    if missing:
        if not located:
            raise PlanRootNotFoundError(missing)
        raise UnknownCommitReferenceError(missing)

    root_index = min(located)
    window = history[root_index:]

    root = window[0]
    if root.parent:
        base = root.parent
    elif root_index > 0:
        base = history[root_index - 1].sha
    else:
        base = REBASE_ROOT

    if len(window) <= 1:
        return RebaseScript(base=base)

    script = RebaseScript(base=base)

    for commit in window:
        action = actions.get(commit.sha)

        if action is None:
            message = _resolve_message(None, commit, placeholder)
            script.directives.append(_directive(RebaseActionType.PICK, commit, message))
            continue

        if action.action == RebaseActionType.DROP:
            script.dropped.append(commit.sha)
            continue

        kind = action.action
        if kind == RebaseActionType.SQUASH and not script.directives:
            # Nothing earlier in the todo to squash into
            kind = RebaseActionType.PICK

        message = _resolve_message(action, commit, placeholder)
        script.directives.append(_directive(kind, commit, message))

        if kind == RebaseActionType.REWORD and message != commit.subject.strip():
            script.messages[commit.sha] = message

    return script
