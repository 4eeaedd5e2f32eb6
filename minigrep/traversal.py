from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Sequence

from minigrep.globs import GlobOverrides
from minigrep.ignore import IgnoreRules, base_rules, directory_rules, is_repo_root, repository_rules
from minigrep.options import TraversalSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Entry:
    path: str
    abs_path: Path
    rel_path: str
    is_dir: bool

    @property
    def name(self) -> str:
        return self.abs_path.name


# ----------------------------
# Filters
# ----------------------------
class PathFilter:
    """One admissibility check in the traversal chain."""

    def enter(self, directory: Path) -> None:
        """Called with the absolute path of each directory before its entries are checked."""

    def admits(self, entry: Entry) -> bool:
        raise NotImplementedError


class HiddenFilter(PathFilter):
    def admits(self, entry: Entry) -> bool:
        return not entry.name.startswith(".")


class IgnoreFilter(PathFilter):
    def __init__(self, root_abs: Path):
        rules, git_root = base_rules(root_abs)
        self._git_root = git_root
        self._base = (rules, git_root is not None)
        self._by_dir: dict[Path, tuple[IgnoreRules, bool]] = {}

    def enter(self, directory: Path) -> None:
        rules, in_git = self._by_dir.get(directory.parent, self._base)
        if directory != self._git_root and is_repo_root(directory):
            # A repository nested below the search root brings its own exclude rules.
            in_git = True
            rules = rules.extend(repository_rules(directory))
        self._by_dir[directory] = (rules.extend(directory_rules(directory, in_git)), in_git)

    def admits(self, entry: Entry) -> bool:
        rules, _ = self._by_dir[entry.abs_path.parent]
        return not rules.ignored(entry.abs_path, entry.is_dir)


class GlobFilter(PathFilter):
    def __init__(self, overrides: GlobOverrides):
        self.overrides = overrides

    def admits(self, entry: Entry) -> bool:
        return self.overrides.admits(entry.rel_path, entry.is_dir)


def build_filters(root_abs: Path, spec: TraversalSpec, overrides: Optional[GlobOverrides] = None) -> list[PathFilter]:
    filters: list[PathFilter] = []
    if not spec.include_hidden:
        filters.append(HiddenFilter())
    if spec.respect_ignore_files:
        filters.append(IgnoreFilter(root_abs))
    if overrides:
        filters.append(GlobFilter(overrides))
    return filters


def _admitted(filters: Sequence[PathFilter], entry: Entry) -> bool:
    return all(f.admits(entry) for f in filters)


def _is_regular_file(path: str) -> bool:
    try:
        return stat.S_ISREG(os.lstat(path).st_mode)
    except OSError as ex:
        logger.warning("%s: %s", path, ex.strerror or ex)
        return False


# ----------------------------
# Walk
# ----------------------------
def walk_files(root: str, spec: TraversalSpec, overrides: Optional[GlobOverrides] = None) -> Iterator[str]:
    """Yield every admissible regular file under the directory ``root``.

    Each call starts a fresh walk. Rejected directories are pruned, names are
    visited in sorted order and symlinks are never followed.
    """
    root_abs = Path(os.path.abspath(root))
    filters = build_filters(root_abs, spec, overrides)

    def on_error(ex: OSError) -> None:
        logger.warning("error: %s: %s", ex.filename, ex.strerror or ex)

    for dirpath, dirnames, filenames in os.walk(root, topdown=True, onerror=on_error, followlinks=False):
        dir_abs = Path(os.path.abspath(dirpath))
        for f in filters:
            f.enter(dir_abs)

        def entry(name: str, is_dir: bool) -> Entry:
            abs_path = dir_abs / name
            return Entry(os.path.join(dirpath, name), abs_path, abs_path.relative_to(root_abs).as_posix(), is_dir)

        dirnames[:] = [d for d in sorted(dirnames) if _admitted(filters, entry(d, True))]

        for name in sorted(filenames):
            candidate = entry(name, False)
            if not _admitted(filters, candidate):
                continue
            if _is_regular_file(candidate.path):
                yield candidate.path


def iter_candidates(root: str, spec: TraversalSpec, overrides: Optional[GlobOverrides] = None) -> Iterator[str]:
    """Candidate files for one search root; a regular-file root is its own sole candidate."""
    if Path(root).is_file():
        yield root
        return
    yield from walk_files(root, spec, overrides)
