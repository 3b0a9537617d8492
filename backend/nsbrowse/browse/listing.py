"""Sorted directory listings and their pagination windows."""

from __future__ import annotations

import logging

from nsbrowse.cluster.ports import ClusterClient
from nsbrowse.exceptions import BadPaginationInput, PaginationOutOfBounds
from nsbrowse.schemas.browse import DirectoryListing, PathEntry
from nsbrowse.utils.numbers import parse_int

logger = logging.getLogger(__name__)


def sort_entries(entries: list[PathEntry]) -> list[PathEntry]:
    return sorted(entries, key=lambda entry: entry.absolute_path)


def paginate(
    entries: list[PathEntry], raw_offset: str | None, raw_limit: str | None
) -> DirectoryListing:
    """Cut ``[offset, offset + limit)`` out of already sorted ``entries``.

    With neither parameter present the whole listing is returned and the
    window is left to the client.
    """
    total = len(entries)
    if raw_offset is None and raw_limit is None:
        return DirectoryListing(total=total, entries=entries, deferred=True)

    try:
        offset = parse_int(raw_offset)  # type: ignore[arg-type]
        limit = parse_int(raw_limit)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise BadPaginationInput(
            f"offset={raw_offset!r}, limit={raw_limit!r} must both be integers"
        ) from exc

    if offset < 0 or limit < 0 or offset + limit > total:
        raise PaginationOutOfBounds(
            f"offset={offset}, limit={limit}, total={total}"
        )
    return DirectoryListing(
        total=total, entries=entries, window=entries[offset : offset + limit]
    )


class DirectoryLister:
    def __init__(self, cluster: ClusterClient):
        self._cluster = cluster

    async def list(self, path: str) -> list[PathEntry]:
        """Children of ``path`` sorted by absolute path."""
        children = await self._cluster.list_status(path)
        logger.debug("Listed %d children of %s", len(children), path)
        return sort_entries([PathEntry.from_file_info(info) for info in children])
