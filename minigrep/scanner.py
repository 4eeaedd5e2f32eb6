from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, TextIO

from minigrep.errors import FileIoError
from minigrep.highlight import highlight
from minigrep.options import MatchBudget, SearchOptions
from minigrep.pattern import Matcher
from minigrep.stats import Stats

logger = logging.getLogger(__name__)


def display_path(path: str) -> str:
    """Printable form of a path; undecodable filename bytes become U+FFFD."""
    return os.fsencode(path).decode("utf-8", errors="replace")


def format_record(path: str, lineno: int, column: int, text: str, line_number: bool) -> str:
    path = display_path(path)
    if line_number:
        return f"{path}:{lineno}:{column}: {text}"
    return f"{path}:{column}: {text}"


def scan_file(
    path: str,
    matcher: Matcher,
    options: SearchOptions,
    budget: MatchBudget,
    out: TextIO,
    stats: Optional[Stats] = None,
) -> bool:
    """Stream ``path`` line by line and print one record per matching line.

    Returns True if at least one line matched. Stops reading as soon as the
    budget is exhausted. Raises FileIoError on open/read failure.
    """
    found = False
    try:
        with Path(path).open("rb") as f:
            if stats is not None:
                stats.files_read += 1
            for lineno, raw in enumerate(f, start=1):
                if stats is not None:
                    stats.lines_seen += 1
                line = raw.decode("utf-8", errors="replace").rstrip("\r\n")

                span = matcher.find(line)
                if span is None:
                    continue

                found = True
                # str offsets are code points, so this is a character column.
                column = span[0] + 1
                shown = highlight(line, matcher) if options.color else line
                print(format_record(path, lineno, column, shown, options.line_number), file=out)
                if stats is not None:
                    stats.lines_reported += 1

                if budget.spend():
                    logger.debug("Match budget reached in %s at line %d", path, lineno)
                    break
    except OSError as ex:
        raise FileIoError(path, ex) from ex

    return found
