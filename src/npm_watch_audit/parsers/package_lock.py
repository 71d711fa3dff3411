"""Parse npm package-lock.json to capture resolved transitive dependencies."""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

from ..models import FlatPackageEntry, LegacyDependencyNode
from ..reporting import Reporter, resolve
from .semver import clean_range_operator


class LockfileError(RuntimeError):
    """Raised when package-lock.json cannot be read or is not a JSON object."""


def read_lockfile(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise LockfileError(f"Failed to read {path}: {exc}") from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise LockfileError(f"Invalid JSON in {path}: {exc}") from exc
    except RecursionError as exc:
        raise LockfileError(f"{path} is nested too deeply to decode") from exc

    if not isinstance(data, dict):
        raise LockfileError(f"{path} must contain a JSON object")
    return data


def collect_legacy_dependencies(
    dependencies: Mapping[str, Any] | None,
    packages: dict[str, str],
    *,
    reporter: Reporter | None = None,
) -> None:
    """Walk a lockfile v1 ``dependencies`` tree depth-first into ``packages``.

    Every versioned node overwrites any earlier value for its name, so the
    last node visited wins. The walk keeps its own stack, so tree depth is
    not bounded by the interpreter's recursion limit.
    """
    if not dependencies:
        return

    report = resolve(reporter)
    stack: list[Iterator[tuple[str, Any]]] = [iter(dependencies.items())]
    while stack:
        item = next(stack[-1], None)
        if item is None:
            stack.pop()
            continue

        name, data = item
        try:
            node = LegacyDependencyNode.from_mapping(name, data)
        except ValueError as exc:
            report.warning(f"skipping lockfile dependency: {exc}")
            continue

        if node.version:
            packages[node.name] = clean_range_operator(node.version)

        if node.malformed_dependencies:
            report.warning(f"ignoring dependencies of '{node.name}': expected an object")
        if node.dependencies:
            stack.append(iter(node.dependencies.items()))


def collect_flat_packages(
    entries: Mapping[str, Any] | None,
    packages: dict[str, str],
    *,
    reporter: Reporter | None = None,
) -> None:
    """Copy top-level ``node_modules/<name>`` entries of a lockfile v2+ map.

    Entries installed under another package's own ``node_modules`` are skipped.
    """
    if not entries:
        return

    for path, data in entries.items():
        try:
            entry = FlatPackageEntry.from_mapping(path, data)
        except ValueError as exc:
            resolve(reporter).warning(f"skipping lockfile package: {exc}")
            continue

        if not entry.is_installed_package or entry.is_nested or not entry.version:
            continue
        packages[entry.package_name] = clean_range_operator(entry.version)


def collect(
    lock_data: Mapping[str, Any],
    packages: dict[str, str],
    *,
    reporter: Reporter | None = None,
) -> None:
    """Merge every schema generation present in ``lock_data`` into ``packages``.

    npm v1-v6 write a ``dependencies`` tree, npm v7+ a ``packages`` map, and
    npm v7-v8 write both. A broken section is reported and the other one is
    still applied.
    """
    report = resolve(reporter)
    sections = (
        ("dependencies", collect_legacy_dependencies),
        ("packages", collect_flat_packages),
    )
    for key, collector in sections:
        section = lock_data.get(key)
        if section is None:
            continue
        if not isinstance(section, Mapping):
            report.warning(f"ignoring lockfile '{key}': expected an object")
            continue
        collector(section, packages, reporter=report)
