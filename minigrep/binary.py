from __future__ import annotations

from pathlib import Path
from typing import Union

SNIFF_SIZE = 1024


def is_binary(path: Union[str, Path], sample_size: int = SNIFF_SIZE) -> bool:
    """Treat a file as binary if its first ``sample_size`` bytes hold a NUL.

    Raises OSError when the file cannot be opened or read; callers decide
    what that means for the run.
    """
    with Path(path).open("rb") as f:
        chunk = f.read(sample_size)
    return b"\x00" in chunk
