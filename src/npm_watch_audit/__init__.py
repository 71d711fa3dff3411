"""npm-watch-audit core package.

Checks the versions a project resolves for a list of watched npm packages and
flags those at or below a given version. The same entrypoints back the CLI and
programmatic use.
"""

__all__ = [
    "core",
]
