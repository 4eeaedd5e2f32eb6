"""Ignore-file discovery and evaluation.

Rules come from, lowest precedence first: the global git ignore file, the
repository's ``.git/info/exclude``, then ``.gitignore`` and ``.ignore`` of
every directory from the filesystem root down to the one being walked.
Git-specific sources only count inside a git repository. Each file is one
pathspec ``GitIgnoreSpec`` scoped to a base directory; across files the last
one with an opinion decides.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from pathspec import GitIgnoreSpec

logger = logging.getLogger(__name__)

IGNORE_FILENAME = ".ignore"
GITIGNORE_FILENAME = ".gitignore"
GIT_DIR = ".git"


@dataclass(frozen=True)
class ScopedSpec:
    base: Path
    spec: GitIgnoreSpec
    source: Path


def relative_to(path: Path, base: Path) -> Optional[str]:
    """POSIX-style path of ``path`` strictly below ``base``, or None."""
    if path == base or not path.is_relative_to(base):
        return None
    return path.relative_to(base).as_posix()


class IgnoreRules:
    def __init__(self, specs: Iterable[ScopedSpec] = ()):
        self.specs = tuple(specs)

    def __len__(self) -> int:
        return len(self.specs)

    def extend(self, more: Iterable[ScopedSpec]) -> "IgnoreRules":
        more = tuple(more)
        if not more:
            return self
        return IgnoreRules(self.specs + more)

    def ignored(self, abs_path: Path, is_dir: bool) -> bool:
        verdict = False
        for scoped in self.specs:
            rel = relative_to(abs_path, scoped.base)
            if rel is None:
                continue
            result = scoped.spec.check_file(rel + "/" if is_dir else rel)
            if result.include is not None:
                verdict = result.include
        return verdict


def load_ignore_file(path: Path, base: Path) -> list[ScopedSpec]:
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        return []
    except OSError as ex:
        logger.warning("%s: cannot read ignore file: %s", path, ex.strerror or ex)
        return []

    lines: list[str] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        try:
            GitIgnoreSpec.from_lines([line])
        except ValueError as ex:
            logger.warning("%s:%d: %s", path, lineno, ex)
            continue
        lines.append(line)

    spec = GitIgnoreSpec.from_lines(lines)
    if not len(spec):
        return []
    logger.debug("Loaded %d ignore rule(s) from %s", len(spec), path)
    return [ScopedSpec(base, spec, path)]


def resolve_git_dir(repo_root: Path) -> Optional[Path]:
    """The git directory of ``repo_root``; follows ``gitdir:`` files of worktrees and submodules."""
    git_entry = repo_root / GIT_DIR
    if git_entry.is_dir():
        return git_entry
    if not git_entry.is_file():
        return None
    try:
        content = git_entry.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None
    for raw_line in content.splitlines():
        stripped = raw_line.strip()
        if stripped.startswith("gitdir:"):
            git_dir = Path(stripped[len("gitdir:"):].strip())
            if not git_dir.is_absolute():
                git_dir = repo_root / git_dir
            return git_dir
    return None


def is_repo_root(directory: Path) -> bool:
    return (directory / GIT_DIR).exists()


def find_git_root(directory: Path) -> Optional[Path]:
    for d in (directory, *directory.parents):
        if is_repo_root(d):
            return d
    return None


def global_gitignore_path() -> Path:
    config_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / "git" / "ignore"


def repository_rules(repo_root: Path) -> list[ScopedSpec]:
    """Global ignore and ``info/exclude`` rules, scoped to ``repo_root``."""
    specs = load_ignore_file(global_gitignore_path(), repo_root)
    git_dir = resolve_git_dir(repo_root)
    if git_dir is not None:
        specs += load_ignore_file(git_dir / "info" / "exclude", repo_root)
    return specs


def directory_rules(directory: Path, in_git: bool) -> list[ScopedSpec]:
    """Rules declared by the ignore files that live in ``directory``."""
    specs: list[ScopedSpec] = []
    if in_git:
        specs += load_ignore_file(directory / GITIGNORE_FILENAME, directory)
    specs += load_ignore_file(directory / IGNORE_FILENAME, directory)
    return specs


def base_rules(root_abs: Path) -> tuple[IgnoreRules, Optional[Path]]:
    """Rules in force at ``root_abs`` before its own ignore files are read.

    Returns the rules and the enclosing repository root, if any.
    """
    git_root = find_git_root(root_abs)
    specs: list[ScopedSpec] = []
    if git_root is not None:
        specs += repository_rules(git_root)

    for d in reversed(root_abs.parents):
        in_git = git_root is not None and (d == git_root or d.is_relative_to(git_root))
        specs += directory_rules(d, in_git)
    return IgnoreRules(specs), git_root
