"""Wire types reported by the master, workers and backing store."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class ReadType(str, Enum):
    CACHE = "CACHE"
    CACHE_PROMOTE = "CACHE_PROMOTE"
    NO_CACHE = "NO_CACHE"


class WorkerNetAddress(BaseModel):
    """Network address of a worker or a backing-store node."""
    host: str
    rpc_port: int = 0
    data_port: int = 0
    web_port: int = 0

    def __str__(self) -> str:
        if self.data_port:
            return f"{self.host}:{self.data_port}"
        return self.host


class BlockLocation(BaseModel):
    """One in-memory replica of a block."""
    worker_id: int = 0
    worker_address: WorkerNetAddress
    tier_alias: str = "MEM"


class BlockInfo(BaseModel):
    block_id: int
    length: int = 0
    locations: list[BlockLocation] = []


class FileBlockInfo(BaseModel):
    """A block of a file plus the backing-store copies of its data."""
    block_info: BlockInfo
    offset: int = 0
    ufs_locations: list[WorkerNetAddress] = []


class FileInfo(BaseModel):
    """File or directory attributes as resolved by the metadata service."""
    file_id: int
    name: str
    path: str
    length: int = 0
    block_size_bytes: int = 0
    creation_time_ms: int = 0
    last_modification_time_ms: int = 0
    completed: bool = True
    folder: bool = False
    pinned: bool = False
    in_memory_percentage: int = 0
    owner: str = ""
    group: str = ""
    permission: int = 0o644
    block_ids: list[int] = Field(default_factory=list)
