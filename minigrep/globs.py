"""``--glob`` overrides, compiled with pathspec.

A plain glob includes a path, ``!glob`` excludes it. When any include glob
is given, a file must match one; a matching exclude always wins. Directories
are only rejected by an exclude, so include globs never prune a subtree.
"""
from __future__ import annotations

from typing import Iterable, Optional

from pathspec import GitIgnoreSpec

from minigrep.errors import TraversalSetupError


def _compile(globs: list[str]) -> Optional[GitIgnoreSpec]:
    if not globs:
        return None
    for g in globs:
        try:
            GitIgnoreSpec.from_lines([g])
        except ValueError as ex:
            raise TraversalSetupError(g, str(ex)) from ex
    return GitIgnoreSpec.from_lines(globs)


def _matches(spec: Optional[GitIgnoreSpec], rel_path: str) -> bool:
    return spec is not None and spec.check_file(rel_path).include is True


class GlobOverrides:
    def __init__(self, globs: Iterable[str] = ()):
        self.globs = tuple(globs)
        self.include_spec = _compile([g for g in self.globs if not g.startswith("!")])
        self.exclude_spec = _compile([g[1:] for g in self.globs if g.startswith("!")])

    def __bool__(self) -> bool:
        return bool(self.globs)

    def admits(self, rel_path: str, is_dir: bool) -> bool:
        if is_dir:
            # pathspec only applies directory patterns ("build/") to paths ending in "/"
            return not _matches(self.exclude_spec, rel_path + "/")
        if self.include_spec is not None and not _matches(self.include_spec, rel_path):
            return False
        return not _matches(self.exclude_spec, rel_path)
