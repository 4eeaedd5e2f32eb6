from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator, Optional

from minigrep.errors import PatternError


def wrap_whole_word(pattern: str) -> str:
    # Group first so every alternative gets its own boundaries.
    return rf"\b(?:{pattern})\b"


@dataclass(frozen=True)
class Matcher:
    pattern: str
    ignore_case: bool = False
    whole_word: bool = False
    regex: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        source = wrap_whole_word(self.pattern) if self.whole_word else self.pattern
        flags = re.IGNORECASE if self.ignore_case else 0
        try:
            rx = re.compile(source, flags)
        except re.error as ex:
            raise PatternError(self.pattern, ex) from ex
        object.__setattr__(self, "regex", rx)

    def find(self, line: str) -> Optional[tuple[int, int]]:
        """Span of the first match in ``line`` (character offsets), or None."""
        m = self.regex.search(line)
        return m.span() if m else None

    def find_all(self, line: str) -> Iterator[tuple[int, int]]:
        """Spans of all non-overlapping matches, left to right."""
        for m in self.regex.finditer(line):
            yield m.span()


def compile_pattern(pattern: str, ignore_case: bool = False, whole_word: bool = False) -> Matcher:
    return Matcher(pattern, ignore_case=ignore_case, whole_word=whole_word)
