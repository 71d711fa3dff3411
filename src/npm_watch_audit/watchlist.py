"""Watch-list loading and specifier parsing.

A watch-list is plain text with one specifier per line::

    lodash
    lodash@4.17.21
    @babel/core
    @babel/core@7.24.0

The source may be a local file or an http(s) URL.
"""

from __future__ import annotations

from pathlib import Path

import requests
from requests import Response
from tenacity import retry, stop_after_attempt, wait_fixed

from .models import WatchEntry
from .reporting import Reporter, resolve


class WatchListError(RuntimeError):
    """Base error for watch-lists that cannot be loaded."""


class WatchListNotFoundError(WatchListError):
    """Raised when a local watch-list file does not exist."""


class WatchListFetchError(WatchListError):
    """Raised when a remote watch-list cannot be downloaded."""


def parse_specifier(line: str) -> WatchEntry | None:
    """Parse one watch-list line, or return None when there is nothing usable.

    ``@`` both opens a scope (``@scope/name``) and separates a version
    (``name@1.0.0``). A leading ``@`` is always a scope, so the line must split
    into exactly two or three ``@`` segments; any other count is dropped.
    Unscoped names split on the last ``@``.
    """
    line = line.strip()
    if not line:
        return None

    if line.startswith("@"):
        parts = line.split("@")
        if len(parts) == 2:
            name, version = line, None
        elif len(parts) == 3:
            name, version = f"@{parts[1]}", parts[2]
        else:
            return None
    else:
        name, sep, version = line.rpartition("@")
        if not sep:
            name, version = line, None

    if not name or name == "@":
        return None
    return WatchEntry(name=name, requested_version=version or None)


def parse_lines(lines: list[str], *, reporter: Reporter | None = None) -> list[WatchEntry]:
    report = resolve(reporter)
    entries: list[WatchEntry] = []
    for number, line in enumerate(lines, start=1):
        entry = parse_specifier(line)
        if entry is not None:
            entries.append(entry)
        elif line.strip():
            report.debug(f"skipping unparseable watch-list line {number}: {line.strip()}")
    return entries


@retry(reraise=True, stop=stop_after_attempt(3), wait=wait_fixed(2))
def _http_get(url: str) -> Response:
    return requests.get(url, timeout=30)


def fetch_watch_list(url: str) -> str:
    """Return the text of a remote watch-list."""

    try:
        response = _http_get(url)
    except requests.RequestException as exc:
        raise WatchListFetchError(f"Failed to fetch watch-list {url}: {exc}") from exc

    if response.status_code != 200:
        raise WatchListFetchError(
            f"Unexpected status code {response.status_code} fetching watch-list {url}"
        )

    return response.text


def read_watch_list(source: str | Path) -> str:
    text_source = str(source)
    if text_source.startswith("http://") or text_source.startswith("https://"):
        return fetch_watch_list(text_source)

    path = Path(source)
    if not path.is_file():
        raise WatchListNotFoundError(f"Watch-list file not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise WatchListError(f"Failed to read watch-list {path}: {exc}") from exc


def load_watch_list(
    source: str | Path,
    *,
    reporter: Reporter | None = None,
) -> list[WatchEntry]:
    """Load and parse a watch-list, preserving line order."""
    content = read_watch_list(source)
    return parse_lines(content.split("\n"), reporter=reporter)
