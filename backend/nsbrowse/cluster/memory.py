"""In-process cluster — dev-mode demo namespace and test double."""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import AsyncIterator, Iterable

from nsbrowse.cluster.models import (
    BlockInfo,
    BlockLocation,
    FileBlockInfo,
    FileInfo,
    ReadType,
    WorkerNetAddress,
)
from nsbrowse.exceptions import AccessDeniedError, InvalidPathError, PathNotFoundError
from nsbrowse.utils.paths import ROOT, basename, normalize_path, parent_path

logger = logging.getLogger(__name__)

DEFAULT_BLOCK_SIZE = 512 * 1024 * 1024
DEFAULT_TIER_ALIASES = ["MEM", "SSD", "HDD"]


@dataclass
class _Node:
    info: FileInfo
    data: bytes = b""
    blocks: list[FileBlockInfo] = field(default_factory=list)
    children: dict[str, str] = field(default_factory=dict)  # name -> path


class MemoryFileInStream:
    """Stream over an in-memory byte string."""

    def __init__(self, data: bytes):
        self._data = data
        self._pos = 0
        self.closed = False

    async def skip(self, n: int) -> int:
        if n <= 0:
            return 0
        skipped = min(n, len(self._data) - self._pos)
        self._pos += skipped
        return skipped

    async def read(self, n: int) -> bytes | None:
        if n == 0:
            return b""
        if self._pos >= len(self._data):
            return None
        chunk = self._data[self._pos : self._pos + n]
        self._pos += len(chunk)
        return chunk

    async def close(self) -> None:
        self.closed = True


class InMemoryCluster:
    """Namespace, block placement and backing-store report held in dicts."""

    def __init__(
        self,
        master_address: str = "localhost:19998",
        tier_aliases: Iterable[str] = DEFAULT_TIER_ALIASES,
    ):
        self.master_address = master_address
        self.tier_aliases = list(tier_aliases)
        self.nodes: dict[str, _Node] = {}
        self.denied: set[str] = set()
        self.opened_streams: list[MemoryFileInStream] = []
        self._next_file_id = 1
        self._add_node(ROOT, "", folder=True, permission=0o755)

    # -- population -------------------------------------------------------

    def _add_node(self, path: str, name: str, **attrs) -> _Node:
        now_ms = int(time.time() * 1000)
        info = FileInfo(
            file_id=self._next_file_id,
            name=name,
            path=path,
            creation_time_ms=attrs.pop("creation_time_ms", now_ms),
            last_modification_time_ms=attrs.pop("last_modification_time_ms", now_ms),
            **attrs,
        )
        self._next_file_id += 1
        node = _Node(info=info)
        self.nodes[path] = node
        if path != ROOT:
            self.nodes[parent_path(path)].children[name] = path
        return node

    def mkdir(self, path: str, permission: int = 0o755, owner: str = "", group: str = "") -> FileInfo:
        """Create a directory and any missing parents."""
        path = normalize_path(path)
        if path in self.nodes:
            return self.nodes[path].info
        parent = parent_path(path)
        if parent not in self.nodes:
            self.mkdir(parent, permission=permission, owner=owner, group=group)
        node = self._add_node(
            path, basename(path), folder=True, permission=permission, owner=owner, group=group
        )
        return node.info

    def add_file(
        self,
        path: str,
        data: bytes = b"",
        *,
        block_size_bytes: int = DEFAULT_BLOCK_SIZE,
        completed: bool = True,
        workers: Iterable[WorkerNetAddress] = (),
        ufs_locations: Iterable[WorkerNetAddress] = (),
        tier_alias: str = "MEM",
        pinned: bool = False,
        owner: str = "",
        group: str = "",
        permission: int = 0o644,
    ) -> FileInfo:
        """Create a file; every block is placed on every worker in ``workers``."""
        path = normalize_path(path)
        parent = parent_path(path)
        if parent not in self.nodes:
            self.mkdir(parent)
        workers = list(workers)
        ufs_locations = list(ufs_locations)
        node = self._add_node(
            path,
            basename(path),
            length=len(data),
            block_size_bytes=block_size_bytes,
            completed=completed,
            pinned=pinned,
            in_memory_percentage=100 if workers and data else 0,
            owner=owner,
            group=group,
            permission=permission,
        )
        node.data = data
        file_id = node.info.file_id
        for index, offset in enumerate(range(0, len(data), block_size_bytes)):
            block = BlockInfo(
                block_id=(file_id << 24) + index,
                length=min(block_size_bytes, len(data) - offset),
                locations=[
                    BlockLocation(worker_id=i + 1, worker_address=addr, tier_alias=tier_alias)
                    for i, addr in enumerate(workers)
                ],
            )
            node.blocks.append(
                FileBlockInfo(block_info=block, offset=offset, ufs_locations=list(ufs_locations))
            )
        node.info.block_ids = [b.block_info.block_id for b in node.blocks]
        return node.info

    def deny(self, path: str) -> None:
        """Make every lookup of ``path`` fail with an access error."""
        self.denied.add(normalize_path(path))

    # -- ClusterClient ------------------------------------------------------

    def _lookup(self, path: str) -> _Node:
        path = normalize_path(path)
        if path in self.denied:
            raise AccessDeniedError(f"Permission denied: user may not access {path}")
        node = self.nodes.get(path)
        if node is None:
            raise PathNotFoundError(f"Path {path} does not exist")
        return node

    async def get_status(self, path: str) -> FileInfo:
        return self._lookup(path).info.model_copy(deep=True)

    async def list_status(self, path: str) -> list[FileInfo]:
        node = self._lookup(path)
        if not node.info.folder:
            return [node.info.model_copy(deep=True)]
        return [self.nodes[p].info.model_copy(deep=True) for p in node.children.values()]

    async def get_file_block_info_list(self, path: str) -> list[FileBlockInfo]:
        return [b.model_copy(deep=True) for b in self._lookup(path).blocks]

    async def get_storage_tier_aliases(self) -> list[str]:
        return list(self.tier_aliases)

    @asynccontextmanager
    async def open_file(
        self, path: str, read_type: ReadType = ReadType.NO_CACHE
    ) -> AsyncIterator[MemoryFileInStream]:
        node = self._lookup(path)
        if node.info.folder:
            raise InvalidPathError(f"Path {path} is a directory")
        stream = MemoryFileInStream(node.data)
        self.opened_streams.append(stream)
        try:
            yield stream
        finally:
            await stream.close()

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        pass


def build_demo_cluster(master_address: str = "localhost:19998") -> InMemoryCluster:
    """Small namespace used in dev mode."""
    cluster = InMemoryCluster(master_address=master_address)
    workers = [
        WorkerNetAddress(host="worker-1", rpc_port=29998, data_port=29999, web_port=30000),
        WorkerNetAddress(host="worker-2", rpc_port=29998, data_port=29999, web_port=30000),
    ]
    ufs = [WorkerNetAddress(host="hdfs-namenode", data_port=9000)]

    cluster.mkdir("/logs", owner="nsbrowse", group="staff")
    cluster.mkdir("/data/raw", owner="nsbrowse", group="staff")
    cluster.mkdir("/data/empty")
    cluster.add_file(
        "/README.txt",
        b"Demo namespace served by nsbrowse in dev mode.\n",
        workers=workers[:1],
        ufs_locations=ufs,
    )
    cluster.add_file(
        "/logs/master.log",
        b"".join(b"2026-01-01 00:00:%02d INFO master heartbeat ok\n" % (i % 60) for i in range(400)),
        block_size_bytes=4096,
        workers=workers,
        ufs_locations=ufs,
    )
    cluster.add_file("/data/raw/events.bin", bytes(range(256)) * 8, ufs_locations=ufs)
    cluster.add_file("/data/raw/upload.part", b"partial", completed=False)
    cluster.add_file("/data/zero-length", b"")
    logger.info("Demo namespace built with %d entries", len(cluster.nodes))
    return cluster
