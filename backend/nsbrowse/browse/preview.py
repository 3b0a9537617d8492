"""Bounded, display-safe preview of a file's bytes."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from nsbrowse.cluster.models import FileInfo, ReadType
from nsbrowse.cluster.ports import ClusterClient, FileInStream
from nsbrowse.exceptions import UnavailableError
from nsbrowse.schemas.browse import FileBlockView, PreviewResult
from nsbrowse.utils.numbers import parse_int

logger = logging.getLogger(__name__)

PREVIEW_WINDOW_BYTES = 5 * 1024

NOT_COMPLETE_MESSAGE = "The requested file is not complete yet."
EMPTY_FILE_MESSAGE = "Unable to traverse to offset; is file empty?"
OFFSET_BEYOND_FILE_MESSAGE = "Unable to traverse to offset; is offset larger than the file?"
UNREADABLE_MESSAGE = "Unable to read file"

# C0/C1 controls and DEL render as "."; tab, newline and carriage return are kept.
_UNSAFE_CHARS = {
    code: "."
    for code in (*range(0x00, 0x20), *range(0x7F, 0xA0))
    if chr(code) not in "\t\n\r"
}


@dataclass(frozen=True)
class PreviewRead:
    data: bytes


@dataclass(frozen=True)
class OffsetBeyondFile:
    skipped: int


@dataclass(frozen=True)
class EmptyOrUnreadable:
    message: str


ReadOutcome = PreviewRead | OffsetBeyondFile | EmptyOrUnreadable


def parse_offset(raw: str | None) -> int:
    """Integer value of ``raw``; anything unparsable counts as 0."""
    if raw is None:
        return 0
    try:
        return parse_int(raw)
    except ValueError:
        return 0


def compute_offset(raw_offset: str | None, from_end: bool, length: int) -> int:
    """Effective preview offset clamped to ``[0, length]``.

    Without the ``end`` marker the offset counts from the start of the file,
    with it from the end.
    """
    relative = parse_offset(raw_offset)
    offset = length - relative if from_end else relative
    return max(0, min(offset, length))


def render_bytes(data: bytes) -> str:
    """One display character per byte, unsafe control characters neutralized."""
    return data.decode("latin-1").translate(_UNSAFE_CHARS)


async def read_window(stream: FileInStream, offset: int, length: int) -> ReadOutcome:
    """Skip to ``offset`` and read at most one preview window."""
    skipped = await stream.skip(offset)
    if skipped < 0:
        return EmptyOrUnreadable(EMPTY_FILE_MESSAGE)
    if skipped < offset:
        return OffsetBeyondFile(skipped)

    window = min(PREVIEW_WINDOW_BYTES, length - offset)
    if window <= 0:
        return PreviewRead(b"")

    chunk = await stream.read(window)
    if chunk is None:
        return EmptyOrUnreadable(UNREADABLE_MESSAGE)

    data = bytearray(chunk)
    while len(data) < window:
        chunk = await stream.read(window - len(data))
        if not chunk:
            break
        data.extend(chunk)
    return PreviewRead(bytes(data))


def outcome_text(outcome: ReadOutcome) -> str:
    if isinstance(outcome, PreviewRead):
        return render_bytes(outcome.data)
    if isinstance(outcome, OffsetBeyondFile):
        return OFFSET_BEYOND_FILE_MESSAGE
    return outcome.message


class FilePreviewReader:
    """Reads a preview window without promoting the file into any cache tier."""

    def __init__(self, cluster: ClusterClient):
        self._cluster = cluster

    async def preview(self, info: FileInfo, offset: int) -> PreviewResult:
        byte_count = 0
        if info.completed:
            try:
                async with self._cluster.open_file(info.path, ReadType.NO_CACHE) as stream:
                    outcome = await read_window(stream, offset, info.length)
            except OSError as exc:
                raise UnavailableError(str(exc)) from exc
            if isinstance(outcome, PreviewRead):
                byte_count = len(outcome.data)
            else:
                logger.info("Preview of %s at offset %d failed: %s", info.path, offset, outcome)
            text = outcome_text(outcome)
        else:
            text = NOT_COMPLETE_MESSAGE

        tiers = await self._cluster.get_storage_tier_aliases()
        highest_tier_alias = tiers[0] if tiers else ""
        blocks = [
            FileBlockView.from_file_block_info(fbi, highest_tier_alias)
            for fbi in await self._cluster.get_file_block_info_list(info.path)
        ]
        return PreviewResult(
            offset=offset,
            byte_count=byte_count,
            text=text,
            blocks=blocks,
            highest_tier_alias=highest_tier_alias,
        )
