"""Per-request composition of the browse components.

This is the request boundary: every :class:`~nsbrowse.exceptions.BrowseError`
raised while resolving, previewing, listing or aggregating is turned into
exactly one error field of the returned :class:`BrowseView`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from nsbrowse.browse.listing import DirectoryLister, paginate
from nsbrowse.browse.locations import BlockLocationAggregator, FailurePolicy, Sampling
from nsbrowse.browse.paths import PathResolver
from nsbrowse.browse.preview import FilePreviewReader, compute_offset
from nsbrowse.cluster.ports import ClusterClient
from nsbrowse.config import Settings
from nsbrowse.exceptions import (
    AccessDeniedError,
    BadPaginationInput,
    BrowseError,
    InvalidPathError,
    PaginationOutOfBounds,
    PathNotFoundError,
    UnavailableError,
)
from nsbrowse.schemas.browse import BrowseView, PathEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BrowseRequest:
    """Raw query parameters; ``end`` only matters by its presence."""
    path: str | None = None
    offset: str | None = None
    end: str | None = None
    limit: str | None = None


def path_error_message(exc: BrowseError, path: str) -> str:
    if isinstance(exc, (PathNotFoundError, InvalidPathError)):
        return f"Error: Invalid Path {exc}"
    if isinstance(exc, AccessDeniedError):
        return f"Error: File {path} cannot be accessed {exc}"
    if isinstance(exc, UnavailableError):
        return f"Error: File {path} is not available {exc}"
    return f"Error: {exc}"


def location_error_message(exc: BrowseError, path: str) -> str:
    if isinstance(exc, PathNotFoundError):
        return f"Error: non-existing file {exc}"
    if isinstance(exc, InvalidPathError):
        return f"Error: invalid path {exc}"
    return path_error_message(exc, path)


class BrowseService:
    def __init__(
        self,
        cluster: ClusterClient,
        worker_web_port: int,
        debug: bool = False,
        sampling: Sampling = "first_block",
        failure_policy: FailurePolicy = "abort",
    ):
        self._cluster = cluster
        self._worker_web_port = worker_web_port
        self._debug = debug
        self._resolver = PathResolver(cluster)
        self._preview = FilePreviewReader(cluster)
        self._lister = DirectoryLister(cluster)
        self._aggregator = BlockLocationAggregator(cluster, sampling, failure_policy)

    @classmethod
    def from_settings(cls, cluster: ClusterClient, settings: Settings) -> BrowseService:
        return cls(
            cluster,
            worker_web_port=settings.worker_web_port,
            debug=settings.debug,
            sampling=settings.location_sampling,
            failure_policy=settings.location_failure_policy,
        )

    async def browse(self, request: BrowseRequest) -> BrowseView:
        view = BrowseView(
            current_path=request.path or "/",
            master_node_address=self._cluster.master_address,
            debug=self._debug,
        )

        try:
            path = self._resolver.normalize(request.path)
            view.current_path = path
            info = await self._resolver.resolve(path)
            current = PathEntry.from_file_info(info)
            view.current_directory = current
            view.block_size_bytes = current.block_size_bytes
            view.worker_web_port = self._worker_web_port

            if not current.is_directory:
                offset = compute_offset(request.offset, request.end is not None, info.length)
                preview = await self._preview.preview(info, offset)
                view.view = "file"
                view.file_data = preview.text
                view.file_data_length = preview.byte_count
                view.file_blocks = preview.blocks
                view.highest_tier_alias = preview.highest_tier_alias
                view.viewing_offset = preview.offset
                return view

            view.path_infos = await self._resolver.breadcrumbs(path)
            entries = await self._lister.list(path)
        except BrowseError as exc:
            logger.info("Browse of %s failed: %s", view.current_path, exc)
            return self._fail(view, invalid_path_error=path_error_message(exc, view.current_path))

        try:
            await self._aggregator.annotate(entries)
        except BrowseError as exc:
            logger.warning("Location lookup under %s failed: %s", path, exc)
            return self._fail(view, invalid_path_error=location_error_message(exc, path))

        view.n_total_file = len(entries)
        try:
            listing = paginate(entries, request.offset, request.limit)
        except BadPaginationInput as exc:
            return self._fail(view, fatal_error=f"Error: offset or limit parse error, {exc}")
        except PaginationOutOfBounds as exc:
            return self._fail(
                view, fatal_error=f"Error: offset or offset + limit is out of bound, {exc}"
            )

        view.file_infos = listing.entries if listing.deferred else listing.window
        view.pagination_deferred = listing.deferred
        return view

    @staticmethod
    def _fail(view: BrowseView, invalid_path_error: str = "", fatal_error: str = "") -> BrowseView:
        view.view = "browse"
        view.file_data = None
        view.file_data_length = 0
        view.file_infos = None
        view.invalid_path_error = invalid_path_error
        view.fatal_error = fatal_error
        return view
