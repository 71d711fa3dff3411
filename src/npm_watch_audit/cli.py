"""CLI entrypoint for auditing a project against a package watch-list.

Usage:
  npm-watch-audit <watch-list> <project-path> [output] [--config PATH] [-v | -q]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_settings
from .core import run_audit
from .parsers.package_json import ManifestError
from .reporting import ConsoleReporter
from .watchlist import WatchListError


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="npm-watch-audit",
        description="Report watched npm packages used by a project and flag stale versions.",
    )
    parser.add_argument("watch_list", help="Watch-list file (or http(s) URL), one specifier per line")
    parser.add_argument("project_path", type=Path, help="Directory containing package.json")
    parser.add_argument(
        "output",
        nargs="?",
        type=Path,
        default=None,
        help="CSV report path (default: result.csv)",
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to a JSON settings file")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Show debug messages")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only show warnings and errors")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    reporter = ConsoleReporter(verbose=args.verbose, quiet=args.quiet)

    try:
        settings = load_settings(args.config)
        output = args.output or Path(settings.default_output)

        reporter.info(f"watch-list: {args.watch_list}")
        reporter.info(f"project: {args.project_path}")
        reporter.info(f"output: {output}")

        result = run_audit(
            args.watch_list,
            args.project_path,
            output,
            settings=settings,
            reporter=reporter,
        )
    except (ConfigError, ManifestError, WatchListError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except Exception as exc:
        print(f"ERROR: {type(exc).__name__}: {exc}", file=sys.stderr)
        return 1

    if result.stale_count:
        reporter.info(f"{result.stale_count} package(s) at or below the watched version")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
