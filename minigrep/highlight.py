from __future__ import annotations

from typing import TextIO

from minigrep.pattern import Matcher

# ----------------------------
# Color helpers
# ----------------------------
ANSI_RESET = "\x1b[0m"
ANSI_RED = "\x1b[31m"

MATCH_START = ANSI_RED
MATCH_END = ANSI_RESET


def supports_color(stream: TextIO) -> bool:
    return hasattr(stream, "isatty") and stream.isatty()


def highlight(line: str, matcher: Matcher) -> str:
    """Wrap every match in ``line`` with the match markers; the rest is copied as is."""
    parts: list[str] = []
    last = 0
    for a, b in matcher.find_all(line):
        if a == b:
            continue
        parts.append(line[last:a])
        parts.append(MATCH_START)
        parts.append(line[a:b])
        parts.append(MATCH_END)
        last = b
    parts.append(line[last:])
    return "".join(parts)