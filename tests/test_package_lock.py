"""
Tests for collecting resolved versions from package-lock.json.
"""

import sys

import pytest

from npm_watch_audit.parsers.package_lock import (
    LockfileError,
    collect,
    collect_flat_packages,
    collect_legacy_dependencies,
    read_lockfile,
)


def test_collect_legacy_nested_dependencies():
    """Test that a v1 tree yields both parents and nested children."""
    packages = {}
    collect_legacy_dependencies(
        {"a": {"version": "1.0.0", "dependencies": {"b": {"version": "2.0.0"}}}},
        packages,
    )
    assert packages == {"a": "1.0.0", "b": "2.0.0"}


def test_collect_legacy_last_visited_wins():
    """Test that a later node overwrites an earlier one with the same name."""
    packages = {"b": "0.1.0"}
    collect_legacy_dependencies(
        {
            "a": {"version": "1.0.0", "dependencies": {"b": {"version": "2.0.0"}}},
            "b": {"version": "3.0.0"},
        },
        packages,
    )
    assert packages["b"] == "3.0.0"


def test_collect_legacy_strips_range_operators():
    """Test version cleaning of range operators."""
    packages = {}
    collect_legacy_dependencies({"a": {"version": "^1.2.3"}, "b": {"version": ">=~2.0.0"}}, packages)
    assert packages == {"a": "1.2.3", "b": "2.0.0"}


def test_collect_legacy_skips_nodes_without_version():
    """Test that unversioned nodes are still walked for children."""
    packages = {}
    collect_legacy_dependencies({"a": {"dependencies": {"b": {"version": "1.0.0"}}}}, packages)
    assert packages == {"b": "1.0.0"}


def test_collect_legacy_warns_on_malformed_node(reporter):
    """Test that a malformed node is skipped without stopping the walk."""
    packages = {}
    collect_legacy_dependencies(
        {"bad": "1.0.0", "worse": {"version": 3}, "good": {"version": "1.0.0"}},
        packages,
        reporter=reporter,
    )
    assert packages == {"good": "1.0.0"}
    assert len(reporter.by_level("warning")) == 2


def test_collect_flat_packages_top_level_only():
    """Test that nested node_modules entries are excluded."""
    packages = {}
    collect_flat_packages(
        {
            "": {"name": "root", "version": "1.0.0"},
            "node_modules/a": {"version": "1.0.0"},
            "node_modules/@scope/b": {"version": "2.0.0"},
            "node_modules/a/node_modules/c": {"version": "3.0.0"},
            "packages/local": {"version": "9.9.9"},
        },
        packages,
    )
    assert packages == {"a": "1.0.0", "@scope/b": "2.0.0"}


def test_collect_flat_packages_skips_entries_without_version():
    """Test that link entries without version are ignored."""
    packages = {}
    collect_flat_packages({"node_modules/linked": {"resolved": "../linked", "link": True}}, packages)
    assert packages == {}


def test_collect_applies_both_schemas():
    """Test a v2 lockfile carrying both dependencies and packages."""
    packages = {"a": "^0.9.0"}
    collect(
        {
            "lockfileVersion": 2,
            "dependencies": {"a": {"version": "1.0.0"}, "b": {"version": "1.0.0"}},
            "packages": {"node_modules/b": {"version": "1.1.0"}},
        },
        packages,
    )
    assert packages == {"a": "1.0.0", "b": "1.1.0"}


def test_collect_broken_section_does_not_stop_other(reporter):
    """Test that a wrongly shaped section is reported and skipped."""
    packages = {}
    collect(
        {"dependencies": ["not", "a", "mapping"], "packages": {"node_modules/a": {"version": "1.0.0"}}},
        packages,
        reporter=reporter,
    )
    assert packages == {"a": "1.0.0"}
    assert any("dependencies" in w for w in reporter.by_level("warning"))


def test_read_lockfile_invalid_json(tmp_path):
    """Test that invalid JSON raises LockfileError."""
    path = tmp_path / "package-lock.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(LockfileError, match="Invalid JSON"):
        read_lockfile(path)


def test_read_lockfile_not_object(tmp_path):
    """Test that a non-object document raises LockfileError."""
    path = tmp_path / "package-lock.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(LockfileError, match="JSON object"):
        read_lockfile(path)


def test_collect_legacy_keeps_version_when_children_malformed(reporter):
    """Test that a node with an unusable dependencies field still records its version."""
    packages = {}
    collect_legacy_dependencies(
        {"a": {"version": "1.0.0", "dependencies": ["b"]}, "c": {"version": "2.0.0"}},
        packages,
        reporter=reporter,
    )
    assert packages == {"a": "1.0.0", "c": "2.0.0"}
    assert reporter.by_level("warning") == ["ignoring dependencies of 'a': expected an object"]


def test_collect_legacy_walks_trees_deeper_than_recursion_limit():
    """Test that a very deep tree is collected completely."""
    depth = sys.getrecursionlimit() * 2
    tree = {}
    for level in reversed(range(depth)):
        tree = {f"pkg-{level}": {"version": "1.0.0", "dependencies": tree}}

    packages = {}
    collect_legacy_dependencies(tree, packages)

    assert len(packages) == depth
    assert packages["pkg-0"] == "1.0.0"
    assert f"pkg-{depth - 1}" in packages


def test_collect_legacy_depth_first_order():
    """Test that children are visited before the next sibling."""
    packages = {}
    collect_legacy_dependencies(
        {
            "a": {"version": "1.0.0", "dependencies": {"x": {"version": "1.0.0"}}},
            "x": {"version": "2.0.0", "dependencies": {"y": {"version": "1.0.0"}}},
            "y": {"version": "3.0.0"},
        },
        packages,
    )
    assert packages == {"a": "1.0.0", "x": "2.0.0", "y": "3.0.0"}


def test_read_lockfile_not_utf8(tmp_path):
    """Test that undecodable bytes raise LockfileError."""
    path = tmp_path / "package-lock.json"
    path.write_bytes(b'{"name": "\xff"}')
    with pytest.raises(LockfileError, match="Invalid JSON"):
        read_lockfile(path)


def test_read_lockfile_too_deep(tmp_path):
    """Test that JSON nested beyond the decoder's limit raises LockfileError."""
    depth = 100_000
    path = tmp_path / "package-lock.json"
    path.write_text('{"d": ' * depth + "{}" + "}" * depth, encoding="utf-8")
    with pytest.raises(LockfileError, match="nested too deeply"):
        read_lockfile(path)
