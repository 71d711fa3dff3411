"""Match record model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MatchRecord:
    """A watched package found in the project, with its staleness verdict."""

    name: str
    installed_version: str
    requested_version: str | None
    is_stale: bool

    def to_row(self, warning_marker: str) -> list[str]:
        return [self.name, self.installed_version, warning_marker if self.is_stale else ""]
