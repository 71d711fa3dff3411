"""
Shared fixtures for npm-watch-audit tests.
"""

import json
from pathlib import Path

import pytest

from npm_watch_audit.reporting import RecordingReporter


@pytest.fixture
def reporter():
    """Reporter that keeps messages for assertions."""
    return RecordingReporter()


@pytest.fixture
def make_project(tmp_path):
    """Create a project directory with package.json and optional lockfile."""

    def _make(manifest, lockfile=None, raw_lockfile=None) -> Path:
        project = tmp_path / "project"
        project.mkdir(exist_ok=True)
        (project / "package.json").write_text(json.dumps(manifest), encoding="utf-8")
        if lockfile is not None:
            (project / "package-lock.json").write_text(json.dumps(lockfile), encoding="utf-8")
        elif raw_lockfile is not None:
            (project / "package-lock.json").write_text(raw_lockfile, encoding="utf-8")
        return project

    return _make


@pytest.fixture
def make_watch_list(tmp_path):
    """Write a watch-list file from lines."""

    def _make(lines) -> Path:
        path = tmp_path / "packages.txt"
        path.write_text("\n".join(lines), encoding="utf-8")
        return path

    return _make
