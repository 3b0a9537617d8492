"""Display helpers for sizes, permissions and timestamps."""

from __future__ import annotations

from datetime import datetime, timezone

_UNITS = ("KB", "MB", "GB", "TB", "PB")


def format_bytes(num_bytes: int) -> str:
    """Human-readable size; switches unit once a value exceeds 5 of the next one."""
    if num_bytes <= 1024 * 5:
        return f"{num_bytes}B"
    value = float(num_bytes)
    for unit in _UNITS:
        value /= 1024
        if value <= 1024 * 5 or unit == _UNITS[-1]:
            return f"{value:.2f}{unit}"
    return f"{num_bytes}B"  # unreachable


def format_permission(mode: int, is_directory: bool) -> str:
    """Mode bits as an ``ls -l`` style string, e.g. ``drwxr-xr-x``."""
    chars = ["d" if is_directory else "-"]
    for shift in (6, 3, 0):
        bits = (mode >> shift) & 0o7
        chars.append("r" if bits & 0o4 else "-")
        chars.append("w" if bits & 0o2 else "-")
        chars.append("x" if bits & 0o1 else "-")
    return "".join(chars)


def ms_to_datetime(epoch_ms: int) -> datetime:
    return datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc)
