"""Strict integer parsing for query parameters."""

from __future__ import annotations

import re

_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_int(raw: str) -> int:
    """Plain optionally-signed ASCII decimal only.

    Rejects what ``int()`` would otherwise accept: surrounding whitespace,
    ``_`` digit separators and non-ASCII digits. Raises ``ValueError``.
    """
    if not _INTEGER.fullmatch(raw):
        raise ValueError(f"invalid integer: {raw!r}")
    return int(raw)
