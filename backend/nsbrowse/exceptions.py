"""Browse error taxonomy.

Raised by the cluster clients and the browse components, caught only at the
request boundary in :class:`nsbrowse.browse.service.BrowseService`.
"""

from __future__ import annotations


class BrowseError(Exception):
    """Base class for every failure the browse view can report inline."""


class InvalidPathError(BrowseError):
    """The path string cannot be parsed into segments."""


class PathNotFoundError(BrowseError):
    """The path, or one of its ancestors, does not exist."""


class AccessDeniedError(BrowseError):
    """The metadata service rejected the caller."""


class UnavailableError(BrowseError):
    """I/O failure reaching the backing service."""


class BadPaginationInput(BrowseError):
    """``offset`` or ``limit`` is not an integer."""


class PaginationOutOfBounds(BrowseError):
    """The requested window does not fit inside the listing."""
