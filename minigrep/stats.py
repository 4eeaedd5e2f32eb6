from __future__ import annotations

import logging
from dataclasses import dataclass


@dataclass
class Stats:
    files_seen: int = 0
    files_read: int = 0
    files_skipped_binary: int = 0
    files_failed: int = 0
    lines_seen: int = 0
    lines_reported: int = 0
    elapsed_s: float = 0.0

    def log(self, logger: logging.Logger) -> None:
        logger.info(
            "Performance: files_seen=%d files_read=%d skipped_binary=%d failed=%d "
            "lines_seen=%d lines_reported=%d elapsed=%.6fs",
            self.files_seen,
            self.files_read,
            self.files_skipped_binary,
            self.files_failed,
            self.lines_seen,
            self.lines_reported,
            self.elapsed_s,
        )
