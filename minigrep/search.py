from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterable, Optional, TextIO

from minigrep.binary import is_binary
from minigrep.errors import FileIoError
from minigrep.globs import GlobOverrides
from minigrep.options import MatchBudget, SearchOptions, TraversalSpec
from minigrep.pattern import Matcher
from minigrep.scanner import scan_file
from minigrep.stats import Stats
from minigrep.traversal import iter_candidates

logger = logging.getLogger(__name__)


def search_file(
    path: str,
    matcher: Matcher,
    options: SearchOptions,
    budget: MatchBudget,
    out: TextIO,
    stats: Stats,
) -> bool:
    stats.files_seen += 1
    if options.skip_binary:
        try:
            binary = is_binary(path)
        except OSError as ex:
            raise FileIoError(path, ex) from ex
        if binary:
            stats.files_skipped_binary += 1
            logger.debug("Skipping binary file: %s", path)
            return False
    return scan_file(path, matcher, options, budget, out, stats)


def _root_candidates(root: str, spec: TraversalSpec, overrides: GlobOverrides) -> Iterable[str]:
    p = Path(root)
    if p.is_dir() and not spec.recursive:
        logger.warning("%s is a directory (use -r to search recursively)", root)
        return []
    if p.is_file() or p.is_dir():
        return iter_candidates(root, spec, overrides)
    if p.is_symlink() or p.exists():
        logger.warning("%s: not a regular file or directory", root)
    else:
        logger.warning("%s: no such file or directory", root)
    return []


def run(
    paths: Iterable[str],
    matcher: Matcher,
    spec: TraversalSpec,
    options: SearchOptions,
    out: Optional[TextIO] = None,
    stats: Optional[Stats] = None,
) -> bool:
    """Search every root in order; True if any file anywhere had a matching line.

    Raises TraversalSetupError for a malformed glob before anything is read.
    """
    out = out if out is not None else sys.stdout
    stats = stats if stats is not None else Stats()
    overrides = GlobOverrides(spec.globs)
    budget = MatchBudget(options.max_count)
    found_any = False

    for root in paths:
        if budget.exhausted:
            break
        for path in _root_candidates(root, spec, overrides):
            if budget.exhausted:
                break
            try:
                found = search_file(path, matcher, options, budget, out, stats)
            except FileIoError as ex:
                stats.files_failed += 1
                logger.error("%s", ex)
                continue
            found_any = found_any or found

    if budget.exhausted:
        logger.info("Stopped after %d matching line(s) (max-count reached)", budget.emitted)
    return found_any
