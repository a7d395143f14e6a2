"""Executor for compiled rebase scripts.

Contains:
- pick_comment_char: Comment character that keeps reword messages intact
- build_editor_env: Editor overrides that make `git rebase -i` non-interactive
- run_rebase: Run a compiled RebaseScript against the repository
"""

import os
import shlex
import subprocess
import tempfile
from pathlib import Path
from typing import Iterable

from autocommit.git.exceptions import RebaseExecutionError
from autocommit.rebase.models import RebaseScript

# Invoked by git as `$GIT_EDITOR <message-file>`. Looks up the step that just
# ran in rebase-merge/done and, if a message was prepared for that commit,
# writes it over the file. Everything else (squash messages included) is
# accepted as git proposes it.
_MESSAGE_EDITOR_SCRIPT = (
    'done_file=$(git rev-parse --git-path rebase-merge/done); '
    'sha=$(tail -n 1 "$done_file" | cut -d " " -f 2); '
    '[ -n "$sha" ] || exit 0; '
    'for f in {messages_dir}/"$sha"*; do '
    'if [ -f "$f" ]; then cp "$f" "$1"; fi; break; '
    'done'
)


# Tried in order; the first that starts no line of any reword message wins
COMMENT_CHAR_CANDIDATES = "#;@!$%^&|:~"


def pick_comment_char(messages: Iterable[str]) -> str:
    """Choose a comment character that cannot strip a line from a reword message.

    git removes every message line starting with core.commentChar when it
    cleans up an edited message, so a body line such as "#123 was the cause"
    would silently disappear with the default "#".

    Args:
        messages: Messages the rebase will write

    Returns:
        A single comment character

    Raises:
        RebaseExecutionError: If every candidate starts some message line
    """
    starts = {line.lstrip()[:1] for message in messages for line in message.split("\n")}
    for candidate in COMMENT_CHAR_CANDIDATES:
        if candidate not in starts:
            return candidate
    raise RebaseExecutionError(
        f"No usable comment character: every one of {COMMENT_CHAR_CANDIDATES!r} "
        "starts a line of some reword message"
    )


def build_editor_env(todo_file: Path, messages_dir: Path) -> dict[str, str]:
    """Build the environment overrides for a non-interactive rebase.

    Args:
        todo_file: File holding the compiled todo
        messages_dir: Directory of reword messages, one file per full sha

    Returns:
        Mapping of GIT_SEQUENCE_EDITOR and GIT_EDITOR values
    """
    editor_script = _MESSAGE_EDITOR_SCRIPT.format(messages_dir=shlex.quote(str(messages_dir)))
    return {
        # git appends the path of its own todo; replace it with ours
        "GIT_SEQUENCE_EDITOR": f"cp {shlex.quote(str(todo_file))}",
        "GIT_EDITOR": f"sh -c {shlex.quote(editor_script)} autocommit-editor",
    }


def run_rebase(repo_root: Path, script: RebaseScript) -> None:
    """Run a compiled rebase script.

    Nothing is retried or aborted on failure: the repository is left as git
    left it and git's output is reported verbatim.

    Args:
        repo_root: Repository root path
        script: The compiled script; empty scripts are a no-op

    Raises:
        RebaseExecutionError: If git rebase exits non-zero
    """
    if script.is_empty:
        return

    with tempfile.TemporaryDirectory(prefix="autocommit_rebase_") as tmp:
        tmp_dir = Path(tmp)
        todo_file = tmp_dir / "git-rebase-todo"
        todo_file.write_text(script.to_text())

        messages_dir = tmp_dir / "messages"
        messages_dir.mkdir()
        for sha, message in script.messages.items():
            (messages_dir / sha).write_text(message + "\n")

        env = os.environ.copy()
        env.update(build_editor_env(todo_file, messages_dir))

        comment_char = pick_comment_char(script.messages.values())
        target = "--root" if script.onto_root else script.base
        result = subprocess.run(
            [
                "git", "-c", f"core.commentChar={comment_char}",
                "rebase", "-i", "--autostash", target,
            ],
            capture_output=True,
            text=True,
            cwd=repo_root,
            env=env,
        )
        if result.returncode != 0:
            raise RebaseExecutionError(
                f"git rebase onto {target} failed:\n{result.stderr or result.stdout}"
            )
