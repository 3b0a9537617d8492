"""Tests for the /api/browse endpoint."""

from contextlib import asynccontextmanager

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_browse_root_empty(client: AsyncClient):
    resp = await client.get("/api/browse")
    assert resp.status_code == 200
    data = resp.json()
    assert data["view"] == "browse"
    assert data["current_path"] == "/"
    assert data["path_infos"] == []
    assert data["file_infos"] == []
    assert data["invalid_path_error"] == ""
    assert data["fatal_error"] == ""


@pytest.mark.asyncio
async def test_browse_file_from_end(client: AsyncClient, populated):
    resp = await client.get("/api/browse", params={"path": "/a.txt", "offset": "2000", "end": ""})
    assert resp.status_code == 200
    data = resp.json()
    assert data["view"] == "file"
    assert data["viewing_offset"] == 8000
    assert len(data["file_data"]) == 2000
    assert data["file_data_length"] == 2000
    assert data["file_blocks"][0]["locations"] == ["worker-1"]


@pytest.mark.asyncio
async def test_browse_file_bad_offset_defaults_to_start(client: AsyncClient, populated):
    resp = await client.get("/api/browse", params={"path": "/a.txt", "offset": "abc"})
    data = resp.json()
    assert data["viewing_offset"] == 0
    assert len(data["file_data"]) == 5120


@pytest.mark.asyncio
async def test_browse_directory_page(client: AsyncClient, populated):
    resp = await client.get("/api/browse", params={"path": "/dir/", "offset": "3", "limit": "2"})
    data = resp.json()
    assert data["current_path"] == "/dir"
    assert [e["name"] for e in data["file_infos"]] == ["d.log", "e.log"]
    assert data["n_total_file"] == 5
    assert data["file_infos"][0]["file_locations"] == ["worker-1:29999", "worker-2:29999"]
    assert data["file_infos"][0]["permission"] == "-rw-r--r--"


@pytest.mark.asyncio
async def test_browse_errors_are_inline(client: AsyncClient, populated):
    resp = await client.get("/api/browse", params={"path": "/dir", "offset": "4", "limit": "2"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["fatal_error"].startswith("Error: offset or offset + limit is out of bound")
    assert data["invalid_path_error"] == ""

    resp = await client.get("/api/browse", params={"path": "/missing"})
    assert resp.status_code == 200
    assert resp.json()["invalid_path_error"].startswith("Error: Invalid Path")


@pytest.mark.asyncio
async def test_browse_stream_failure_is_inline(client: AsyncClient, populated):
    class _ResetStream:
        closed = False

        async def skip(self, n):
            return n

        async def read(self, n):
            raise OSError("connection reset by worker")

        async def close(self):
            self.closed = True

    stream = _ResetStream()

    @asynccontextmanager
    async def _open(path, read_type):
        try:
            yield stream
        finally:
            await stream.close()

    populated.open_file = _open
    resp = await client.get("/api/browse", params={"path": "/a.txt"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["view"] == "browse"
    assert data["invalid_path_error"] == "Error: File /a.txt is not available connection reset by worker"
    assert stream.closed
