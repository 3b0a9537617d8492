"""Browse view-models — handed to the renderer as plain JSON."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from nsbrowse.cluster.models import FileBlockInfo, FileInfo
from nsbrowse.utils.storage import format_bytes, format_permission, ms_to_datetime


class PathEntry(BaseModel):
    """File or directory row of the browse view."""
    id: int
    name: str
    absolute_path: str
    is_directory: bool
    length: int
    size: str
    block_size_bytes: int
    is_completed: bool
    is_pinned: bool = False
    in_memory_percent: int = 0
    creation_time: datetime
    modification_time: datetime
    owner: str = ""
    group: str = ""
    permission: str = ""
    file_locations: list[str] | None = None  # in-memory workers first, then backing store

    @classmethod
    def from_file_info(cls, info: FileInfo) -> PathEntry:
        return cls(
            id=info.file_id,
            name=info.name,
            absolute_path=info.path,
            is_directory=info.folder,
            length=info.length,
            size="" if info.folder else format_bytes(info.length),
            block_size_bytes=info.block_size_bytes,
            is_completed=info.completed,
            is_pinned=info.pinned,
            in_memory_percent=info.in_memory_percentage,
            creation_time=ms_to_datetime(info.creation_time_ms),
            modification_time=ms_to_datetime(info.last_modification_time_ms),
            owner=info.owner,
            group=info.group,
            permission=format_permission(info.permission, info.folder),
        )


class FileBlockView(BaseModel):
    """Per-block storage summary shown next to a file preview."""
    id: int
    block_length: int
    offset: int
    tier_aliases: list[str] = []
    locations: list[str] = []
    is_in_highest_tier: bool = False

    @classmethod
    def from_file_block_info(cls, fbi: FileBlockInfo, highest_tier_alias: str) -> FileBlockView:
        block = fbi.block_info
        tiers: list[str] = []
        for location in block.locations:
            if location.tier_alias not in tiers:
                tiers.append(location.tier_alias)
        return cls(
            id=block.block_id,
            block_length=block.length,
            offset=fbi.offset,
            tier_aliases=tiers,
            locations=[location.worker_address.host for location in block.locations],
            is_in_highest_tier=highest_tier_alias in tiers,
        )


class PreviewResult(BaseModel):
    offset: int
    byte_count: int = 0
    text: str
    blocks: list[FileBlockView] = []
    highest_tier_alias: str = ""


class DirectoryListing(BaseModel):
    total: int
    entries: list[PathEntry]
    window: list[PathEntry] | None = None
    deferred: bool = False


class BrowseView(BaseModel):
    """Everything the renderer needs for either the listing or the file view."""
    view: Literal["browse", "file"] = "browse"
    current_path: str
    path_infos: list[PathEntry] = []
    current_directory: PathEntry | None = None
    file_infos: list[PathEntry] | None = None
    n_total_file: int = 0
    pagination_deferred: bool = False
    file_data: str | None = None
    file_data_length: int = 0
    file_blocks: list[FileBlockView] = []
    viewing_offset: int = 0
    block_size_bytes: int | None = None
    worker_web_port: int | None = None
    highest_tier_alias: str | None = None
    master_node_address: str = ""
    debug: bool = False
    invalid_path_error: str = ""
    fatal_error: str = ""
