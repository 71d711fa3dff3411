"""Parse package.json and extract direct dependencies across sections."""

from __future__ import annotations

import json
from pathlib import Path

from ..models import ManifestDependencies


class ManifestError(RuntimeError):
    """Raised when package.json cannot be read or has an unsupported shape."""


class ManifestNotFoundError(ManifestError):
    """Raised when package.json does not exist."""


def load_manifest(path: Path) -> ManifestDependencies:
    """Return the direct dependency sections of ``path``.

    Sections: dependencies, devDependencies, peerDependencies. Versions are
    kept exactly as declared (ranges included).

    Raises:
        ManifestNotFoundError: if the file is missing.
        ManifestError: if the file is unreadable, not JSON, or a section is
            not a mapping of name to version string.
    """
    if not path.is_file():
        raise ManifestNotFoundError(f"package.json not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ManifestError(f"Failed to read {path}: {exc}") from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ManifestError(f"Invalid JSON in {path}: {exc}") from exc

    try:
        return ManifestDependencies.from_document(data)
    except ValueError as exc:
        raise ManifestError(f"Unsupported manifest format in {path}:{exc}") from exc
