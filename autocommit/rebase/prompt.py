"""Rebase planning prompts.

Contains:
- REBASE_SYSTEM_PROMPT: System prompt for rebase planning
- build_rebase_prompt: Build the user prompt from a git context bundle
"""

REBASE_SYSTEM_PROMPT = """You are an expert software engineer tidying a branch before it is pushed.

Review the unpushed commits and decide whether the history should be cleaned up:
- squash commits that only fix or finish the commit before them
- drop commits whose changes are fully reverted later
- reword commits whose messages do not describe their changes
- leave everything else alone

Commits are replayed in their existing order; you cannot reorder them.
Reference ONLY the commit hashes shown in the log.

Output ONLY valid JSON matching the required schema. No markdown fences or commentary."""


def build_rebase_prompt(context_bundle: str) -> str:
    """Build the user prompt for rebase planning.

    Args:
        context_bundle: Output of build_rebase_context()

    Returns:
        User prompt string
    """
    return f"""Propose a cleanup plan for the following unpushed commits.

{context_bundle}

[OUTPUT SCHEMA]
Return a JSON object with this exact structure:
{{
  "rebases": [
    {{"commit": "<full commit hash>", "action": "pick|reword|drop|squash", "message": "optional new message"}}
  ]
}}

[RULES]
1. List only commits that need an action; unlisted commits are kept as they are.
2. "squash" folds a commit into the commit before it; the first commit cannot be squashed.
3. "reword" requires "message"; for other actions "message" is optional.
4. If the history is already clean, return {{"rebases": []}}."""
