"""Staging-related exception classes.

Contains:
- MalformedRangeError: Raised when a hunk range has negative bounds
"""


class MalformedRangeError(ValueError):
    """Raised when a hunk range has negative bounds."""

    pass
