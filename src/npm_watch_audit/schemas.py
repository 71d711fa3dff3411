"""JSON Schema documents for the loosely-typed npm descriptors.

Each schema describes one known shape. Anything outside these shapes is
rejected at the boundary instead of being read with assumed fields.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from jsonschema import Draft202012Validator

DEPENDENCY_SECTIONS = ("dependencies", "devDependencies", "peerDependencies")

_DEPENDENCY_MAP = {
    "type": "object",
    "additionalProperties": {"type": "string"},
}

MANIFEST_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {section: _DEPENDENCY_MAP for section in DEPENDENCY_SECTIONS},
}

LEGACY_NODE_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "version": {"type": "string"},
    },
}

FLAT_ENTRY_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "version": {"type": "string"},
    },
}

manifest_validator = Draft202012Validator(MANIFEST_SCHEMA)
legacy_node_validator = Draft202012Validator(LEGACY_NODE_SCHEMA)
flat_entry_validator = Draft202012Validator(FLAT_ENTRY_SCHEMA)


def format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)
