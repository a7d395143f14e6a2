"""Commit planning prompts.

Contains:
- COMMIT_SYSTEM_PROMPT: System prompt for commit planning
- build_commit_prompt: Build the user prompt from a git context bundle
"""

COMMIT_SYSTEM_PROMPT = """You are an expert software engineer preparing the next git commit from a dirty working tree.

Pick ONE coherent, self-contained change from the working tree and describe how to stage it:
- Stage whole files when every change in the file belongs to the commit
- Stage individual hunks by line range when a file mixes unrelated changes
- Write a concise commit message in imperative mood
- Set "amend" only when the change clearly completes the current HEAD commit

Output ONLY valid JSON matching the required schema. No markdown fences or commentary."""


def build_commit_prompt(context_bundle: str) -> str:
    """Build the user prompt for commit planning.

    Args:
        context_bundle: Output of build_commit_context()

    Returns:
        User prompt string
    """
    return f"""Plan the next commit for the following working tree.

{context_bundle}

[OUTPUT SCHEMA]
Return a JSON object with this exact structure:
{{
  "files": [
    {{
      "path": "path/relative/to/repo/root",
      "hunks": [
        {{"old_start": 10, "old_end": 12, "new_start": 10, "new_end": 14}}
      ]
    }}
  ],
  "commit_message": "Imperative summary line\\n\\nOptional body",
  "amend": false
}}

[RULES]
1. Omit "hunks" (or leave it empty) to stage the whole file. Untracked files are always staged whole.
2. Line ranges are 1-based and inclusive. old_* ranges address the file as currently staged, new_* ranges address the file on disk.
3. Take ranges from the @@ headers of [GIT_DIFF]: "@@ -a,b +c,d @@" means old_start=a, old_end=a+b-1, new_start=c, new_end=c+d-1.
4. For a pure insertion set old_start to the line the new lines follow and old_end = old_start - 1; for a pure deletion do the same with new_start/new_end. For a new file use old_start = 0 and old_end = 0.
5. The old and new ranges of one hunk must line up line by line; do not shift lines between them.
6. If no meaningful commit can be made, return {{"files": [], "commit_message": null}}."""
