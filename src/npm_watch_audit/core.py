"""Core audit entrypoints.

This module MUST NOT print; all operator messages go through the reporter so
the same flow is usable from the CLI and from tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .config import Settings
from .models import MatchRecord, WatchEntry
from .parsers.package_json import load_manifest
from .parsers.package_lock import LockfileError, collect, read_lockfile
from .report import build_matches, write_csv
from .reporting import Reporter, resolve
from .watchlist import load_watch_list


@dataclass(slots=True)
class AuditResult:
    """Everything an audit run produced."""

    entries: list[WatchEntry]
    packages: dict[str, str]
    matches: list[MatchRecord]
    output_path: Path | None

    @property
    def stale_count(self) -> int:
        return sum(1 for match in self.matches if match.is_stale)


def load_project_packages(
    project_path: Path,
    *,
    settings: Settings | None = None,
    reporter: Reporter | None = None,
) -> dict[str, str]:
    """Return name -> version for direct and, when locked, transitive packages.

    package.json seeds the mapping; package-lock.json then overwrites it with
    the versions npm actually resolved.
    """
    report = resolve(reporter)
    settings = settings or Settings()

    manifest = load_manifest(project_path / settings.manifest_name)
    packages = manifest.merged()

    lock_path = project_path / settings.lockfile_name
    if not lock_path.is_file():
        report.info(f"{settings.lockfile_name} not found; using {settings.manifest_name} only")
        return packages

    try:
        lock_data = read_lockfile(lock_path)
    except LockfileError as exc:
        report.warning(f"{exc}; using {settings.manifest_name} only")
        return packages

    collect(lock_data, packages, reporter=report)
    report.info(f"loaded dependencies from {settings.lockfile_name}")
    return packages


def run_audit(
    watch_list: str | Path,
    project_path: Path,
    output_path: Path | None = None,
    *,
    settings: Settings | None = None,
    reporter: Reporter | None = None,
) -> AuditResult:
    """Audit ``project_path`` against ``watch_list`` and write the CSV report.

    Params:
        watch_list: local path or http(s) URL of the watch-list
        project_path: directory holding package.json and, optionally,
            package-lock.json
        output_path: report destination; defaults to ``settings.default_output``

    Returns: the parsed entries, resolved packages, matches and the written
    report path (None when nothing matched).
    """
    report = resolve(reporter)
    settings = settings or Settings()
    output_path = output_path or Path(settings.default_output)

    packages = load_project_packages(project_path, settings=settings, reporter=report)
    report.info(f"project packages loaded: {len(packages)}")

    entries = load_watch_list(watch_list, reporter=report)
    report.info(f"watch-list loaded: {len(entries)} packages")

    matches = build_matches(entries, packages, reporter=report)
    written = write_csv(matches, output_path, settings=settings, reporter=report)
    report.info(f"done: {len(matches)} watched packages found")

    return AuditResult(
        entries=entries,
        packages=packages,
        matches=matches,
        output_path=written,
    )
