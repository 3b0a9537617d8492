"""Interfaces this service consumes from the cluster."""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Protocol

from nsbrowse.cluster.models import FileBlockInfo, FileInfo, ReadType


class FileInStream(Protocol):
    """Byte stream over a file.

    ``skip`` and ``read`` follow the usual stream contract: they return the
    number of bytes skipped, or the bytes read, and signal an exhausted
    stream with ``-1`` / ``None``.
    """

    async def skip(self, n: int) -> int: ...

    async def read(self, n: int) -> bytes | None: ...

    async def close(self) -> None: ...


class ClusterClient(Protocol):
    master_address: str

    async def get_status(self, path: str) -> FileInfo: ...

    async def list_status(self, path: str) -> list[FileInfo]: ...

    async def get_file_block_info_list(self, path: str) -> list[FileBlockInfo]: ...

    async def get_storage_tier_aliases(self) -> list[str]: ...

    def open_file(
        self, path: str, read_type: ReadType = ReadType.NO_CACHE
    ) -> AbstractAsyncContextManager[FileInStream]: ...

    async def ping(self) -> bool: ...

    async def close(self) -> None: ...
