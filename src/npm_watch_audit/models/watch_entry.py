"""Watch-list entry model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WatchEntry:
    """A watched package and its optional threshold version."""

    name: str
    requested_version: str | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Package name must be non-empty")
