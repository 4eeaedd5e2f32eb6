from __future__ import annotations

import re


class MiniGrepError(Exception):
    pass


class PatternError(MiniGrepError):
    """The search pattern is not a valid regular expression."""

    def __init__(self, pattern: str, cause: re.error):
        super().__init__(f"Invalid regex {pattern!r}: {cause}")
        self.pattern = pattern
        self.cause = cause


class TraversalSetupError(MiniGrepError):
    """A --glob override is malformed; raised before any file is scanned."""

    def __init__(self, glob: str, reason: str):
        super().__init__(f"Invalid glob {glob!r}: {reason}")
        self.glob = glob
        self.reason = reason


class FileIoError(MiniGrepError):
    """Opening, sniffing or reading a single file failed."""

    def __init__(self, path: str, cause: OSError):
        reason = cause.strerror or str(cause)
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.cause = cause
