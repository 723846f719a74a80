"""gitloc domain exceptions.

Expected conditions (no marker, malformed marker) are *results*, not
exceptions.  These types are reserved for caller mistakes.
"""

from __future__ import annotations


# ── Base ────────────────────────────────────────────────────
class GitLocError(Exception):
    """Root exception for all gitloc errors."""


# ── Arguments ───────────────────────────────────────────────
class InvalidStartPath(GitLocError):
    """The path handed to the resolver is not absolute."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Start path must be absolute: {path!r}")
        self.path = path


class InvalidLineRange(GitLocError, ValueError):
    """A line selection is empty, reversed, or not 1-based."""

    def __init__(self, start: int, end: int) -> None:
        super().__init__(f"Invalid line range: {start}-{end}")
        self.start = start
        self.end = end
