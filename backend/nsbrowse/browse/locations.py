"""Where a file's data lives: in-memory replicas plus backing-store copies."""

from __future__ import annotations

import logging
from typing import Literal

from nsbrowse.cluster.models import FileBlockInfo
from nsbrowse.cluster.ports import ClusterClient
from nsbrowse.exceptions import InvalidPathError, PathNotFoundError
from nsbrowse.schemas.browse import PathEntry

logger = logging.getLogger(__name__)

Sampling = Literal["first_block", "all_blocks"]
FailurePolicy = Literal["abort", "skip"]


def merge_locations(blocks: list[FileBlockInfo]) -> list[str]:
    """In-memory worker addresses of ``blocks`` followed by their backing-store addresses.

    Order is kept as reported; duplicates are not removed.
    """
    addresses: list[str] = []
    for fbi in blocks:
        addresses.extend(str(loc.worker_address) for loc in fbi.block_info.locations)
    for fbi in blocks:
        addresses.extend(str(addr) for addr in fbi.ufs_locations)
    return addresses


class BlockLocationAggregator:
    """Attaches a location list to every non-empty file entry.

    By default only the first block of each file is inspected, as a
    representative sample; ``sampling="all_blocks"`` merges every block.
    """

    def __init__(
        self,
        cluster: ClusterClient,
        sampling: Sampling = "first_block",
        failure_policy: FailurePolicy = "abort",
    ):
        self._cluster = cluster
        self._sampling = sampling
        self._failure_policy = failure_policy

    async def locations_for(self, entry: PathEntry) -> list[str] | None:
        if entry.is_directory or entry.length <= 0:
            return None
        blocks = await self._cluster.get_file_block_info_list(entry.absolute_path)
        if not blocks:
            return []
        if self._sampling == "first_block":
            blocks = blocks[:1]
        return merge_locations(blocks)

    async def annotate(self, entries: list[PathEntry]) -> list[PathEntry]:
        """Sets ``file_locations`` in place, one sequential lookup per entry."""
        for entry in entries:
            try:
                entry.file_locations = await self.locations_for(entry)
            except (PathNotFoundError, InvalidPathError) as exc:
                if self._failure_policy == "abort":
                    raise
                logger.warning("Skipping locations of %s: %s", entry.absolute_path, exc)
        return entries
