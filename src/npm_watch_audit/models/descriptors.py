"""Validated views over package.json and package-lock.json content."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..schemas import (
    DEPENDENCY_SECTIONS,
    flat_entry_validator,
    format_errors,
    legacy_node_validator,
    manifest_validator,
)

INSTALL_DIR = "node_modules/"
NESTED_INSTALL_DIR = "/node_modules/"


@dataclass(frozen=True)
class ManifestDependencies:
    """Direct dependency sections of a package.json."""

    sections: dict[str, dict[str, str]] = field(default_factory=dict)

    @classmethod
    def from_document(cls, data: Any) -> ManifestDependencies:
        errors = sorted(manifest_validator.iter_errors(data), key=lambda e: list(e.path))
        if errors:
            raise ValueError("\n" + format_errors(errors))
        sections = {section: dict(data.get(section) or {}) for section in DEPENDENCY_SECTIONS}
        return cls(sections=sections)

    def merged(self) -> dict[str, str]:
        """Return one mapping; later sections win on a name clash."""
        packages: dict[str, str] = {}
        for section in DEPENDENCY_SECTIONS:
            packages.update(self.sections.get(section, {}))
        return packages


@dataclass(frozen=True)
class LegacyDependencyNode:
    """One node of the lockfile v1 ``dependencies`` tree."""

    name: str
    version: str | None
    dependencies: dict[str, Any]
    malformed_dependencies: bool = False

    @classmethod
    def from_mapping(cls, name: str, data: Any) -> LegacyDependencyNode:
        if not legacy_node_validator.is_valid(data):
            raise ValueError(f"unrecognised dependency node for '{name}'")
        children = data.get("dependencies") or {}
        malformed = not isinstance(children, dict)
        return cls(
            name=name,
            version=data.get("version") or None,
            dependencies={} if malformed else children,
            malformed_dependencies=malformed,
        )


@dataclass(frozen=True)
class FlatPackageEntry:
    """One entry of the lockfile v2+ ``packages`` map, keyed by install path."""

    path: str
    version: str | None

    @classmethod
    def from_mapping(cls, path: str, data: Any) -> FlatPackageEntry:
        if not flat_entry_validator.is_valid(data):
            raise ValueError(f"unrecognised package entry for '{path}'")
        return cls(path=path, version=data.get("version") or None)

    @property
    def is_installed_package(self) -> bool:
        return self.path.startswith(INSTALL_DIR)

    @property
    def is_nested(self) -> bool:
        return NESTED_INSTALL_DIR in self.package_name

    @property
    def package_name(self) -> str:
        return self.path[len(INSTALL_DIR):] if self.is_installed_package else self.path
