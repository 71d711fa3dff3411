"""Join the watch-list against the resolved packages and write the CSV report."""

from __future__ import annotations

import csv
from collections.abc import Iterable, Mapping
from pathlib import Path

from .config import Settings
from .models import MatchRecord, WatchEntry
from .parsers.semver import is_stale
from .reporting import Reporter, resolve


def build_matches(
    entries: Iterable[WatchEntry],
    packages: Mapping[str, str],
    *,
    reporter: Reporter | None = None,
) -> list[MatchRecord]:
    """Return one record per watched package present in ``packages``.

    Names match exactly and case-sensitively. Watched packages the project does
    not use produce nothing.
    """
    report = resolve(reporter)
    matches: list[MatchRecord] = []
    for entry in entries:
        installed = packages.get(entry.name)
        if not installed:
            continue

        stale = is_stale(installed, entry.requested_version, reporter=report)
        matches.append(
            MatchRecord(
                name=entry.name,
                installed_version=installed,
                requested_version=entry.requested_version,
                is_stale=stale,
            )
        )
        suffix = f" (warning: version at or below {entry.requested_version})" if stale else ""
        report.info(f"found: {entry.name}@{installed}{suffix}")
    return matches


def write_csv(
    matches: list[MatchRecord],
    output_path: Path,
    *,
    settings: Settings | None = None,
    reporter: Reporter | None = None,
) -> Path | None:
    """Write ``matches`` as CSV; return the path, or None when nothing matched."""
    report = resolve(reporter)
    settings = settings or Settings()

    if not matches:
        report.info("no watched packages found")
        return None

    with output_path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle, lineterminator="\n")
        writer.writerow(settings.headers)
        for match in matches:
            writer.writerow(match.to_row(settings.warning_marker))

    report.info(f"wrote results to {output_path}")
    return output_path
