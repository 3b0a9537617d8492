"""Tests for the request boundary — scenarios and inline error reporting."""

from contextlib import asynccontextmanager

import pytest

from nsbrowse.browse.preview import NOT_COMPLETE_MESSAGE
from nsbrowse.browse.service import BrowseRequest, BrowseService
from nsbrowse.cluster.memory import MemoryFileInStream
from nsbrowse.exceptions import InvalidPathError, PathNotFoundError, UnavailableError


def _service(cluster, **kwargs):
    return BrowseService(cluster, worker_web_port=30000, **kwargs)


def _errors(view):
    return [e for e in (view.invalid_path_error, view.fatal_error) if e]


class TestScenarios:
    @pytest.mark.asyncio
    async def test_empty_root(self, cluster):
        view = await _service(cluster).browse(BrowseRequest())
        assert view.view == "browse"
        assert view.current_path == "/"
        assert view.path_infos == []
        assert view.file_infos == []
        assert view.n_total_file == 0
        assert view.pagination_deferred is True
        assert _errors(view) == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "offset, end, expected_offset, expected_count",
        [
            ("0", None, 0, 5120),
            ("3000", None, 3000, 5120),
            ("2000", "", 8000, 2000),
            ("20000", None, 10000, 0),
        ],
    )
    async def test_file_preview(self, populated, offset, end, expected_offset, expected_count):
        view = await _service(populated).browse(
            BrowseRequest(path="/a.txt", offset=offset, end=end)
        )
        assert view.view == "file"
        assert view.viewing_offset == expected_offset
        assert len(view.file_data) == expected_count
        assert view.file_data_length == expected_count
        assert view.highest_tier_alias == "MEM"
        assert view.worker_web_port == 30000
        assert view.current_directory.absolute_path == "/a.txt"
        assert _errors(view) == []

    @pytest.mark.asyncio
    async def test_paginated_directory(self, populated):
        view = await _service(populated).browse(BrowseRequest(path="/dir", offset="0", limit="2"))
        assert [e.absolute_path for e in view.file_infos] == ["/dir/a.log", "/dir/b.log"]
        assert view.n_total_file == 5
        assert [e.absolute_path for e in view.path_infos] == ["/"]
        assert view.pagination_deferred is False
        assert _errors(view) == []

    @pytest.mark.asyncio
    async def test_pagination_out_of_bounds(self, populated):
        view = await _service(populated).browse(BrowseRequest(path="/dir", offset="4", limit="2"))
        assert view.view == "browse"
        assert view.fatal_error.startswith("Error: offset or offset + limit is out of bound")
        assert view.invalid_path_error == ""
        assert view.file_infos is None


class TestDirectoryView:
    @pytest.mark.asyncio
    async def test_locations_attached(self, populated):
        view = await _service(populated).browse(BrowseRequest(path="/"))
        by_path = {e.absolute_path: e for e in view.file_infos}
        assert by_path["/a.txt"].file_locations == ["worker-1:29999", "ufs:9000"]
        assert by_path["/dir"].file_locations is None

    @pytest.mark.asyncio
    async def test_pagination_parse_error(self, populated):
        view = await _service(populated).browse(BrowseRequest(path="/dir", offset="x", limit="2"))
        assert view.fatal_error.startswith("Error: offset or limit parse error")
        assert _errors(view) == [view.fatal_error]

    @pytest.mark.asyncio
    async def test_only_limit_is_parse_error(self, populated):
        view = await _service(populated).browse(BrowseRequest(path="/dir", limit="2"))
        assert view.fatal_error.startswith("Error: offset or limit parse error")

    @pytest.mark.asyncio
    async def test_master_address_and_debug(self, cluster):
        view = await _service(cluster, debug=True).browse(BrowseRequest())
        assert view.master_node_address == "master:19998"
        assert view.debug is True


class TestErrors:
    @pytest.mark.asyncio
    async def test_missing_path(self, cluster):
        view = await _service(cluster).browse(BrowseRequest(path="/nope"))
        assert view.view == "browse"
        assert view.invalid_path_error.startswith("Error: Invalid Path")
        assert view.fatal_error == ""

    @pytest.mark.asyncio
    async def test_invalid_path(self, cluster):
        view = await _service(cluster).browse(BrowseRequest(path="relative/path"))
        assert view.current_path == "relative/path"
        assert view.invalid_path_error.startswith("Error: Invalid Path")

    @pytest.mark.asyncio
    async def test_access_denied(self, populated):
        populated.deny("/dir")
        view = await _service(populated).browse(BrowseRequest(path="/dir"))
        assert view.invalid_path_error.startswith("Error: File /dir cannot be accessed")

    @pytest.mark.asyncio
    async def test_unavailable(self, populated):
        async def _down(path):
            raise UnavailableError("connection refused")

        populated.list_status = _down
        view = await _service(populated).browse(BrowseRequest(path="/dir"))
        assert view.invalid_path_error == "Error: File /dir is not available connection refused"

    @pytest.mark.asyncio
    async def test_file_view_failure_falls_back_to_browse(self, populated):
        async def _down(path):
            raise UnavailableError("timeout")

        populated.get_file_block_info_list = _down
        view = await _service(populated).browse(BrowseRequest(path="/a.txt"))
        assert view.view == "browse"
        assert view.file_data is None
        assert "is not available" in view.invalid_path_error

    @pytest.mark.asyncio
    async def test_stream_failure_is_reported_inline(self, populated):
        opened = []

        @asynccontextmanager
        async def _open(path, read_type):
            stream = MemoryFileInStream(b"")
            opened.append(stream)

            async def _reset(n):
                raise OSError("connection reset by worker")

            stream.read = _reset
            try:
                yield stream
            finally:
                await stream.close()

        populated.open_file = _open
        view = await _service(populated).browse(BrowseRequest(path="/a.txt"))
        assert view.view == "browse"
        assert view.file_data is None
        assert view.file_data_length == 0
        assert view.invalid_path_error == (
            "Error: File /a.txt is not available connection reset by worker"
        )
        assert view.fatal_error == ""
        assert opened[0].closed

    @pytest.mark.asyncio
    async def test_incomplete_file_is_not_an_error(self, cluster):
        cluster.add_file("/upload.part", b"abc", completed=False)
        view = await _service(cluster).browse(BrowseRequest(path="/upload.part"))
        assert view.view == "file"
        assert view.file_data == NOT_COMPLETE_MESSAGE
        assert _errors(view) == []

    @pytest.mark.asyncio
    async def test_stale_entry_fails_listing(self, populated):
        original = populated.get_file_block_info_list

        async def _stale(path):
            if path == "/dir/b.log":
                raise PathNotFoundError("/dir/b.log")
            return await original(path)

        populated.get_file_block_info_list = _stale
        view = await _service(populated).browse(BrowseRequest(path="/dir"))
        assert view.invalid_path_error == "Error: non-existing file /dir/b.log"
        assert view.file_infos is None
        assert view.fatal_error == ""

    @pytest.mark.asyncio
    async def test_invalid_entry_path_fails_listing(self, populated):
        async def _invalid(path):
            raise InvalidPathError(path)

        populated.get_file_block_info_list = _invalid
        view = await _service(populated).browse(BrowseRequest(path="/dir"))
        assert view.invalid_path_error.startswith("Error: invalid path")

    @pytest.mark.asyncio
    async def test_stale_entry_skipped_with_skip_policy(self, populated):
        original = populated.get_file_block_info_list

        async def _stale(path):
            if path == "/dir/b.log":
                raise PathNotFoundError("/dir/b.log")
            return await original(path)

        populated.get_file_block_info_list = _stale
        view = await _service(populated, failure_policy="skip").browse(BrowseRequest(path="/dir"))
        assert _errors(view) == []
        assert len(view.file_infos) == 5
