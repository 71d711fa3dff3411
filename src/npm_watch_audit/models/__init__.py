"""Data models for the watch-list audit."""

from __future__ import annotations

from .descriptors import FlatPackageEntry, LegacyDependencyNode, ManifestDependencies
from .match_record import MatchRecord
from .watch_entry import WatchEntry

__all__ = [
    "FlatPackageEntry",
    "LegacyDependencyNode",
    "ManifestDependencies",
    "MatchRecord",
    "WatchEntry",
]
