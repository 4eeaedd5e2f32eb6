from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SearchOptions:
    line_number: bool = False
    color: bool = True
    max_count: Optional[int] = None
    skip_binary: bool = True


@dataclass(frozen=True)
class TraversalSpec:
    recursive: bool = False
    include_hidden: bool = False
    respect_ignore_files: bool = True
    globs: tuple[str, ...] = ()


class MatchBudget:
    """Count of emitted matching lines, shared by every file of one run."""

    def __init__(self, max_count: Optional[int] = None):
        self.max_count = max_count
        self.emitted = 0

    @property
    def exhausted(self) -> bool:
        return self.max_count is not None and self.emitted >= self.max_count

    def spend(self) -> bool:
        """Record one emitted line. Returns True once the cap has been reached."""
        self.emitted += 1
        return self.exhausted

    def __repr__(self) -> str:
        return f"MatchBudget(emitted={self.emitted}, max_count={self.max_count})"
