"""Path resolution and breadcrumb ancestry."""

from __future__ import annotations

import logging

from nsbrowse.cluster.models import FileInfo
from nsbrowse.cluster.ports import ClusterClient
from nsbrowse.exceptions import PathNotFoundError
from nsbrowse.schemas.browse import PathEntry
from nsbrowse.utils.paths import ROOT, join_path, normalize_path, path_components

logger = logging.getLogger(__name__)


class PathResolver:
    """Resolves namespace paths against the metadata service."""

    def __init__(self, cluster: ClusterClient):
        self._cluster = cluster

    @staticmethod
    def normalize(raw: str | None) -> str:
        return normalize_path(raw)

    async def resolve(self, path: str) -> FileInfo:
        """Metadata of ``path``; raises ``PathNotFoundError`` if it does not exist."""
        path = normalize_path(path)
        info = await self._cluster.get_status(path)
        if not info.path:
            raise PathNotFoundError(path)
        return info

    async def breadcrumbs(self, path: str) -> list[PathEntry]:
        """Entries for the root and every proper ancestor, root first, leaf excluded."""
        components = path_components(path)
        if len(components) == 1:
            return []

        crumbs = [PathEntry.from_file_info(await self.resolve(ROOT))]
        current = ROOT
        for segment in components[1:-1]:
            current = join_path(current, segment)
            crumbs.append(PathEntry.from_file_info(await self.resolve(current)))
        logger.debug("Resolved %d breadcrumbs for %s", len(crumbs), path)
        return crumbs
