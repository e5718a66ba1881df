"""Command line interface: ``dutree [options] [path ...]``.

Parses options into a DuTreeConfig, loads the color table from
``LS_COLORS`` and prints the tree of the given paths (default ``.``).
"""

import argparse
import os
import signal
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .api import du_tree
from .config import (
    KIB,
    DepthConfig,
    DisplayConfig,
    DuTreeConfig,
    FilterConfig,
    load_color_table,
    parse_threshold,
)

PROG = "dutree"


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        usage="%(prog)s [options] <path> [<path>..]",
        description="Analyse disk usage from the terminal.",
    )
    parser.add_argument("paths", nargs="*", metavar="path",
                        help="files or directories to analyse (default: .)")
    parser.add_argument("-d", "--depth", nargs="?", const="1", metavar="DEPTH",
                        help="show directories up to depth N (def 1)")
    parser.add_argument("-a", "--aggr", nargs="?", const="1M", metavar="N[KMG]",
                        help="aggregate smaller than N B/KiB/MiB/GiB (def 1M)")
    parser.add_argument("-s", "--summary", action="store_true",
                        help="equivalent to -da, or -d1 -a1M")
    parser.add_argument("-u", "--usage", action="store_true",
                        help="report real disk usage instead of file size")
    parser.add_argument("-b", "--bytes", action="store_true",
                        help="print sizes in bytes")
    parser.add_argument("-f", "--files-only", action="store_true",
                        help="skip directories for a fast local overview")
    parser.add_argument("-x", "--exclude", action="append", default=[],
                        metavar="NAME",
                        help="exclude matching files or directories")
    parser.add_argument("-H", "--no-hidden", action="store_true",
                        help="exclude hidden files")
    parser.add_argument("-A", "--ascii", action="store_true",
                        help="ASCII characters only, no colors")
    parser.add_argument("-v", "--version", action="version",
                        version=f"{PROG} version {__version__}",
                        help="print version number")
    return parser


def config_from_args(args: argparse.Namespace) -> DuTreeConfig:
    """Turn parsed arguments into a DuTreeConfig.

    A ``--depth`` value that is not a number means depth 1. The option
    takes the following word as its value, so ``dutree -d somedir``
    scans ``.`` to depth 1.

    Raises:
        ValueError: On a malformed threshold or a missing path
    """
    paths = list(args.paths)

    max_depth = None
    if args.depth is not None:
        max_depth = int(args.depth) if args.depth.isdigit() else 1

    aggregate_below = parse_threshold(args.aggr) if args.aggr is not None else 0

    if args.summary:
        max_depth = 1
        aggregate_below = KIB ** 2

    args.paths = paths or ["."]
    for path in args.paths:
        if not os.path.lexists(path):
            raise ValueError(f"path {path} doesn't exist")

    return DuTreeConfig(
        depth=DepthConfig(max_depth=max_depth),
        filter=FilterConfig(
            exclude_names=list(args.exclude),
            include_hidden=not args.no_hidden,
            files_only=args.files_only,
        ),
        display=DisplayConfig(raw_bytes=args.bytes, ascii_only=args.ascii),
        aggregate_below=aggregate_below,
        physical=args.usage,
        colors={} if args.ascii else load_color_table(),
    )


def _restore_sigpipe() -> None:
    # Exit quietly when the reading end of a pipe goes away (dutree | head)
    if hasattr(signal, "SIGPIPE"):
        signal.signal(signal.SIGPIPE, signal.SIG_DFL)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point of the ``dutree`` console script.

    Returns:
        Process exit status: 0 on success, 1 on invalid arguments
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = config_from_args(args)
    except ValueError as e:
        print(f"{PROG}: {e}", file=sys.stderr)
        return 1

    if argv is None:
        _restore_sigpipe()

    try:
        du_tree([Path(p) for p in args.paths], config)
    except BrokenPipeError:
        # Python flushes stdout again at exit; point it somewhere harmless
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        return 0
    return 0


if __name__ == "__main__":
    sys.exit(main())
