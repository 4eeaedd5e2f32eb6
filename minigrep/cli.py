from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import Optional, Sequence, TextIO

from minigrep import __version__
from minigrep.errors import PatternError, TraversalSetupError
from minigrep.highlight import supports_color
from minigrep.options import SearchOptions, TraversalSpec
from minigrep.pattern import compile_pattern
from minigrep.search import run
from minigrep.stats import Stats

EXIT_FOUND = 0
EXIT_NOT_FOUND = 1
EXIT_ERROR = 2


# ----------------------------
# Logging
# ----------------------------
def setup_logging(debug: bool = False, log_file: Optional[str] = None) -> logging.Logger:
    """Install the stderr handler, then the optional log file.

    Raises OSError if the log file cannot be opened; stderr is already set up by then.
    """
    logger = logging.getLogger("minigrep")
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    # Console handler for user-facing diagnostics (one line each)
    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(logging.WARNING)
    ch.setFormatter(logging.Formatter("minigrep: %(message)s"))
    logger.addHandler(ch)

    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8", errors="replace")
        fh.setLevel(logging.DEBUG if debug else logging.INFO)
        fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s: %(message)s"))
        logger.addHandler(fh)
        logger.info("Log started: %s", log_file)

    return logger


# ----------------------------
# CLI
# ----------------------------
def non_negative_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}")
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0: {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="minigrep",
        description="Search for regex patterns in files and directories.",
    )
    p.add_argument("pattern", help="Search pattern (Python re syntax).")
    p.add_argument("paths", nargs="*", default=["."], metavar="PATH",
                   help="Files or directories to search (default: .).")

    p.add_argument("-i", "--ignore-case", action="store_true", help="Case-insensitive search.")
    p.add_argument("-n", "--line-number", action="store_true", help="Show line numbers.")
    p.add_argument("-r", "--recursive", action="store_true", help="Search directories recursively.")
    p.add_argument("-w", "--word", action="store_true", help="Match whole words only.")
    p.add_argument("-m", "--max-count", type=non_negative_int, default=None, metavar="N",
                   help="Stop after N matching lines in total.")

    p.add_argument("--no-color", action="store_true", help="Disable match highlighting.")
    p.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="always",
        help="Match highlighting (default: always).",
    )
    p.add_argument("--hidden", action="store_true", help="Include hidden files and directories.")
    p.add_argument("--no-ignore", action="store_true",
                   help="Do not respect .gitignore/.ignore/exclude files.")
    p.add_argument("--glob", action="append", default=[], metavar="GLOB",
                   help="Filter files by glob ('!' to exclude); repeatable.")
    p.add_argument("--binary", action="store_true", help="Search files that look binary too.")

    p.add_argument("--debug", action="store_true", help="Debug-level logging in the log file.")
    p.add_argument("--log-file", default=None, metavar="PATH", help="Also write a log to PATH.")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return p


def options_from_args(args: argparse.Namespace, stdout: TextIO) -> SearchOptions:
    if args.no_color or args.color == "never":
        color = False
    elif args.color == "always":
        color = True
    else:
        color = supports_color(stdout)
    return SearchOptions(
        line_number=args.line_number,
        color=color,
        max_count=args.max_count,
        skip_binary=not args.binary,
    )


def traversal_from_args(args: argparse.Namespace) -> TraversalSpec:
    return TraversalSpec(
        recursive=args.recursive,
        include_hidden=args.hidden,
        respect_ignore_files=not args.no_ignore,
        globs=tuple(args.glob),
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        logger = setup_logging(args.debug, args.log_file)
    except OSError as ex:
        logging.getLogger("minigrep").error("cannot open log file %s: %s", args.log_file, ex.strerror or ex)
        return EXIT_ERROR

    options = options_from_args(args, sys.stdout)
    spec = traversal_from_args(args)
    logger.info("Args: %s", " ".join(sys.argv if argv is None else argv))
    logger.info("Options: %s %s", options, spec)

    stats = Stats()
    t0 = time.perf_counter()
    try:
        try:
            matcher = compile_pattern(args.pattern, ignore_case=args.ignore_case, whole_word=args.word)
        except PatternError as ex:
            logger.error("%s", ex)
            return EXIT_ERROR

        try:
            found = run(args.paths, matcher, spec, options, out=sys.stdout, stats=stats)
        except TraversalSetupError as ex:
            logger.error("%s", ex)
            return EXIT_ERROR

        return EXIT_FOUND if found else EXIT_NOT_FOUND

    finally:
        stats.elapsed_s = time.perf_counter() - t0
        stats.log(logger)


if __name__ == "__main__":
    raise SystemExit(main())
