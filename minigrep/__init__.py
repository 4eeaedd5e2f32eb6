"""minigrep: search files and directory trees for lines matching a regex."""

__version__ = "0.1.0"
