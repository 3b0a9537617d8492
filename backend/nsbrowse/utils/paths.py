"""Namespace path helpers — absolute, ``/``-separated paths only."""

from __future__ import annotations

from nsbrowse.exceptions import InvalidPathError

SEPARATOR = "/"
ROOT = SEPARATOR


def normalize_path(raw: str | None) -> str:
    """Canonical form of ``raw``; empty or missing input means the root.

    Repeated and trailing separators are collapsed. Relative paths and
    ``.``/``..`` segments are rejected.
    """
    if raw is None or raw == "":
        return ROOT
    if not raw.startswith(SEPARATOR):
        raise InvalidPathError(f"Path {raw} is not absolute")
    segments = [s for s in raw.split(SEPARATOR) if s]
    for segment in segments:
        if segment in (".", ".."):
            raise InvalidPathError(f"Path {raw} contains a relative segment")
        if any(ord(c) < 0x20 for c in segment):
            raise InvalidPathError(f"Path {raw!r} contains control characters")
    return SEPARATOR + SEPARATOR.join(segments)


def path_components(path: str) -> list[str]:
    """``/a/b`` -> ``["", "a", "b"]``; the root -> ``[""]``."""
    path = normalize_path(path)
    if path == ROOT:
        return [""]
    return path.split(SEPARATOR)


def join_path(parent: str, name: str) -> str:
    if parent.endswith(SEPARATOR):
        return parent + name
    return parent + SEPARATOR + name


def parent_path(path: str) -> str:
    path = normalize_path(path)
    if path == ROOT:
        return ROOT
    head = path.rsplit(SEPARATOR, 1)[0]
    return head or ROOT


def basename(path: str) -> str:
    return normalize_path(path).rsplit(SEPARATOR, 1)[-1]
