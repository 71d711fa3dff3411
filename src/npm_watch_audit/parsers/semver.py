"""Semantic version cleaning and comparison built atop packaging.version.

The release triple is ordered with ``packaging.version.Version``; pre-release
identifiers follow SemVer 2.0.0 precedence, which PEP 440 does not model:
- numeric identifiers compare numerically and sort before alphanumeric ones
- a version with a pre-release sorts before the same release without one
- build metadata is ignored
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering

from packaging.version import Version

from ..reporting import Reporter, resolve

_RANGE_OPERATORS = re.compile(r"^[\^~>=<]+")
_DECORATION = re.compile(r"^[\s=v]+")

# https://semver.org/#is-there-a-suggested-regular-expression-regex-to-check-a-semver-string
_SEMVER_PATTERN = re.compile(
    r"^(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<prerelease>(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+(?P<build>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)


def clean_range_operator(version: str) -> str:
    """Strip leading ``^ ~ > = <`` characters and nothing else."""
    return _RANGE_OPERATORS.sub("", version)


@total_ordering
@dataclass(frozen=True)
class SemVer:
    release: Version
    prerelease: tuple[str, ...] = ()
    build: str | None = None

    def __str__(self) -> str:
        text = str(self.release)
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        if self.build:
            text += "+" + self.build
        return text

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self.release == other.release and self.prerelease == other.prerelease

    def __hash__(self) -> int:
        return hash((self.release, self.prerelease))

    def __lt__(self, other: SemVer) -> bool:
        if self.release != other.release:
            return self.release < other.release
        if not self.prerelease or not other.prerelease:
            return bool(self.prerelease) and not other.prerelease
        return _prerelease_key(self.prerelease) < _prerelease_key(other.prerelease)


def _prerelease_key(identifiers: tuple[str, ...]) -> tuple[tuple[int, int, str], ...]:
    return tuple(
        (0, int(ident), "") if ident.isdigit() else (1, 0, ident) for ident in identifiers
    )


def parse(version: str) -> SemVer | None:
    """Parse a strict SemVer string, returning None when it is not one."""
    match = _SEMVER_PATTERN.match(version)
    if match is None:
        return None
    release = Version(f"{match['major']}.{match['minor']}.{match['patch']}")
    prerelease = tuple(match["prerelease"].split(".")) if match["prerelease"] else ()
    return SemVer(release=release, prerelease=prerelease, build=match["build"])


def clean(version: str) -> SemVer | None:
    """Normalise a loosely written version (``^1.2.3``, ``v1.2.3``, ``>= 1.2.3``)."""
    text = clean_range_operator(version.strip())
    text = _DECORATION.sub("", text)
    return parse(text)


def is_stale(
    installed: str,
    requested: str | None,
    *,
    reporter: Reporter | None = None,
) -> bool:
    """Return True when ``installed`` is at or below ``requested``.

    No threshold means nothing to violate. Versions that cannot be read as
    SemVer are reported and treated as not stale.
    """
    if not requested:
        return False

    installed_version = clean(installed)
    requested_version = clean(requested)
    if installed_version is None or requested_version is None:
        resolve(reporter).warning(f"version comparison failed: {installed} vs {requested}")
        return False

    return installed_version <= requested_version
