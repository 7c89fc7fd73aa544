"""Command line interface for monopack."""

import argparse
import logging
import sys
from pathlib import Path

from monopack.errors import MonopackError
from monopack.run_packaging import run_packaging


def _configure_logging(*, verbose: int, quiet: int) -> None:
    """Configure the root logger from -v/-q counts."""
    level = logging.WARNING
    if quiet >= 1:
        level = logging.ERROR
    elif verbose >= 1:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for monopack."""
    ap = argparse.ArgumentParser(
        prog="monopack",
        description=(
            "Resolve the third-party dependencies of a monorepo entry file and "
            "write an installable package.json (plus yarn.lock) next to its bundle."
        ),
    )
    ap.add_argument(
        "main",
        type=Path,
        help="The application entry point source file",
    )
    ap.add_argument(
        "--observations",
        type=Path,
        required=True,
        help='JSON list of {"packageName", "context"} written by the bundler',
    )
    ap.add_argument(
        "-d",
        "--out-dir",
        type=Path,
        help="Output directory (default: a new temporary directory)",
    )
    ap.add_argument(
        "--extra-module",
        action="append",
        default=[],
        help="Additional package to ship, attributed to the entry file (repeatable)",
    )
    ap.add_argument(
        "--monorepo-root",
        type=Path,
        help="Monorepo root (default: from config, lerna.json or workspaces)",
    )
    ap.add_argument(
        "--config",
        type=Path,
        help="Path to monopack.config.yml (default: nearest to the entry file)",
    )
    ap.add_argument(
        "--report",
        type=Path,
        help="Write a JSON resolution report to this path",
    )
    ap.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve and report without writing package.json",
    )
    ap.add_argument("-v", "--verbose", action="count", default=0)
    ap.add_argument("-q", "--quiet", action="count", default=0)
    return ap.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run monopack."""
    args = parse_args(argv)
    _configure_logging(verbose=args.verbose, quiet=args.quiet)
    try:
        return run_packaging(args)
    except MonopackError as exc:
        print(f"=>> monopack error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
