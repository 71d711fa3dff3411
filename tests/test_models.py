"""
Tests for the data models and boundary descriptors.
"""

import pytest

from npm_watch_audit.models import (
    FlatPackageEntry,
    LegacyDependencyNode,
    ManifestDependencies,
    MatchRecord,
    WatchEntry,
)


def test_watch_entry_requires_name():
    """Test that an empty package name is rejected."""
    with pytest.raises(ValueError):
        WatchEntry("")


def test_match_record_row():
    """Test that the marker only appears for stale records."""
    assert MatchRecord("a", "1.0.0", "1.0.0", True).to_row("×") == ["a", "1.0.0", "×"]
    assert MatchRecord("a", "2.0.0", "1.0.0", False).to_row("×") == ["a", "2.0.0", ""]


def test_flat_package_entry_paths():
    """Test install path classification."""
    top = FlatPackageEntry.from_mapping("node_modules/@scope/pkg", {"version": "1.0.0"})
    nested = FlatPackageEntry.from_mapping("node_modules/a/node_modules/b", {"version": "1.0.0"})
    workspace = FlatPackageEntry.from_mapping("packages/app", {"version": "0.0.1"})

    assert top.package_name == "@scope/pkg"
    assert top.is_installed_package and not top.is_nested
    assert nested.is_nested
    assert not workspace.is_installed_package


def test_legacy_node_rejects_unknown_shape():
    """Test that non-object nodes fail validation."""
    with pytest.raises(ValueError, match="lodash"):
        LegacyDependencyNode.from_mapping("lodash", ["1.0.0"])


def test_manifest_dependencies_rejects_non_object():
    """Test that a manifest must be a JSON object."""
    with pytest.raises(ValueError):
        ManifestDependencies.from_document(["not", "an", "object"])


def test_legacy_node_keeps_version_with_malformed_dependencies():
    """Test that a bad child map does not discard the node's own version."""
    node = LegacyDependencyNode.from_mapping("a", {"version": "1.0.0", "dependencies": ["b"]})

    assert node.version == "1.0.0"
    assert node.dependencies == {}
    assert node.malformed_dependencies


def test_legacy_node_null_dependencies_is_not_malformed():
    """Test that a null child map is treated as no children."""
    node = LegacyDependencyNode.from_mapping("a", {"version": "1.0.0", "dependencies": None})

    assert node.dependencies == {}
    assert not node.malformed_dependencies
