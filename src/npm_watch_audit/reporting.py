"""Operator-facing message sinks.

Core functions take a ``reporter`` argument rather than printing, so parsing,
collection and comparison can be exercised without capturing console output.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Protocol, TextIO


class Reporter(Protocol):
    """Structural protocol for progress and warning messages."""

    def debug(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...


class NullReporter:
    """Discard every message."""

    def debug(self, message: str) -> None:
        pass

    def info(self, message: str) -> None:
        pass

    def warning(self, message: str) -> None:
        pass


@dataclass
class ConsoleReporter:
    """Print info to stdout and warnings to stderr."""

    verbose: bool = False
    quiet: bool = False
    stdout: TextIO | None = None
    stderr: TextIO | None = None

    def debug(self, message: str) -> None:
        if self.verbose:
            print(f"DEBUG: {message}", file=self.stderr or sys.stderr)

    def info(self, message: str) -> None:
        if not self.quiet:
            print(message, file=self.stdout or sys.stdout)

    def warning(self, message: str) -> None:
        print(f"WARNING: {message}", file=self.stderr or sys.stderr)


@dataclass
class RecordingReporter:
    """Keep messages in memory as ``(level, message)`` pairs."""

    messages: list[tuple[str, str]] = field(default_factory=list)

    def debug(self, message: str) -> None:
        self.messages.append(("debug", message))

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def by_level(self, level: str) -> list[str]:
        return [message for lvl, message in self.messages if lvl == level]


def resolve(reporter: Reporter | None) -> Reporter:
    return reporter if reporter is not None else NullReporter()
