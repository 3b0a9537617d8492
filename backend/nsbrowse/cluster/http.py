"""REST client for a remote master — used in prod mode."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import httpx
from pydantic import TypeAdapter, ValidationError

from nsbrowse.cluster.models import FileBlockInfo, FileInfo, ReadType
from nsbrowse.exceptions import (
    AccessDeniedError,
    InvalidPathError,
    PathNotFoundError,
    UnavailableError,
)

logger = logging.getLogger(__name__)

_file_info = TypeAdapter(FileInfo)
_file_info_list = TypeAdapter(list[FileInfo])
_block_info_list = TypeAdapter(list[FileBlockInfo])
_tier_list = TypeAdapter(list[str])

_STATUS_ERRORS = {
    400: InvalidPathError,
    403: AccessDeniedError,
    404: PathNotFoundError,
}


def _error_message(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    if isinstance(data, dict):
        return str(data.get("message") or data.get("detail") or data)
    return str(data)


class RemoteFileInStream:
    """Positioned stream that fetches byte ranges from the master on demand."""

    def __init__(self, master: MasterClient, path: str, length: int, read_type: ReadType):
        self._master = master
        self._path = path
        self._length = length
        self._read_type = read_type
        self._pos = 0

    async def skip(self, n: int) -> int:
        if n <= 0:
            return 0
        skipped = min(n, self._length - self._pos)
        self._pos += skipped
        return skipped

    async def read(self, n: int) -> bytes | None:
        if n == 0:
            return b""
        if self._pos >= self._length:
            return None
        resp = await self._master._get(
            "/api/v1/paths/read",
            path=self._path,
            offset=self._pos,
            length=n,
            readType=self._read_type.value,
        )
        if not resp.content:
            return None
        self._pos += len(resp.content)
        return resp.content

    async def close(self) -> None:
        self._pos = self._length


class MasterClient:
    """Talks to the master's REST gateway over one shared httpx client."""

    def __init__(
        self,
        base_url: str,
        master_address: str = "",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.master_address = master_address or base_url.split("//")[-1]
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
        )

    async def _get(self, url: str, **params: Any) -> httpx.Response:
        path = params.get("path", "")
        try:
            resp = await self._client.get(url, params=params)
        except httpx.HTTPError as exc:
            logger.warning("Master unreachable for %s: %s", url, exc)
            raise UnavailableError(f"master unreachable: {exc}") from exc

        if resp.status_code in _STATUS_ERRORS:
            raise _STATUS_ERRORS[resp.status_code](_error_message(resp) or path)
        if resp.status_code >= 400:
            logger.warning("Master returned %d for %s", resp.status_code, url)
            raise UnavailableError(f"master returned {resp.status_code}: {_error_message(resp)}")
        return resp

    async def _get_json(self, adapter: TypeAdapter, url: str, **params: Any):
        resp = await self._get(url, **params)
        try:
            return adapter.validate_json(resp.content)
        except ValidationError as exc:
            raise UnavailableError(f"malformed response from {url}: {exc}") from exc

    async def get_status(self, path: str) -> FileInfo:
        return await self._get_json(_file_info, "/api/v1/paths/status", path=path)

    async def list_status(self, path: str) -> list[FileInfo]:
        return await self._get_json(_file_info_list, "/api/v1/paths/list", path=path)

    async def get_file_block_info_list(self, path: str) -> list[FileBlockInfo]:
        return await self._get_json(_block_info_list, "/api/v1/paths/blocks", path=path)

    async def get_storage_tier_aliases(self) -> list[str]:
        return await self._get_json(_tier_list, "/api/v1/storage/tiers")

    @asynccontextmanager
    async def open_file(
        self, path: str, read_type: ReadType = ReadType.NO_CACHE
    ) -> AsyncIterator[RemoteFileInStream]:
        info = await self.get_status(path)
        if info.folder:
            raise InvalidPathError(f"Path {path} is a directory")
        stream = RemoteFileInStream(self, info.path, info.length, read_type)
        try:
            yield stream
        finally:
            await stream.close()

    async def ping(self) -> bool:
        try:
            resp = await self._client.get("/api/v1/master/ping")
        except httpx.HTTPError as exc:
            logger.debug("Master ping failed: %s", exc)
            return False
        return resp.status_code == 200

    async def close(self) -> None:
        await self._client.aclose()
