"""
Byte-range streaming of stored video files

Serves whole files with 200 or a single inclusive byte window with 206,
reading through an independent file handle per request.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import AsyncIterator, Optional

import aiofiles
import structlog
from fastapi import status
from fastapi.responses import StreamingResponse
from starlette.concurrency import run_in_threadpool

from videoshare.core.exceptions import RangeNotSatisfiableError, StorageError, VideoNotFoundError

logger = structlog.get_logger()

RANGE_VALUE = re.compile(r"^\s*(\d*)\s*-\s*(\d*)\s*$", re.ASCII)


@dataclass(frozen=True)
class ByteRange:
    start: int
    end: int  # inclusive

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    def content_range(self, file_size: int) -> str:
        return f"bytes {self.start}-{self.end}/{file_size}"


def parse_range_header(header: str, file_size: int) -> Optional[ByteRange]:
    """
    Parse a Range header against a file of the given size

    Supports ``bytes=start-end``, ``bytes=start-`` and the suffix form
    ``bytes=-N``. An end past the file is clamped to the last byte.

    Returns:
        The range to serve, or None when the header asks for several
        ranges and should be ignored in favour of the full body

    Raises:
        RangeNotSatisfiableError: If the header is malformed or the range
            does not overlap the file
    """
    unit, sep, value = header.strip().partition("=")
    if not sep or unit.strip().lower() != "bytes":
        raise RangeNotSatisfiableError(header, file_size)

    if "," in value:
        return None

    match = RANGE_VALUE.match(value)
    if match is None or file_size <= 0:
        raise RangeNotSatisfiableError(header, file_size)

    first, last = match.groups()
    last_byte = file_size - 1

    if not first:
        if not last or int(last) == 0:
            raise RangeNotSatisfiableError(header, file_size)
        return ByteRange(start=max(file_size - int(last), 0), end=last_byte)

    start = int(first)
    end = int(last) if last else last_byte
    if start > last_byte or end < start:
        raise RangeNotSatisfiableError(header, file_size)

    return ByteRange(start=start, end=min(end, last_byte))


async def iter_file_range(
    file_path: Path,
    start: int,
    end: int,
    chunk_size: int = 64 * 1024
) -> AsyncIterator[bytes]:
    """Yield bytes ``start..end`` (inclusive) of a file in bounded chunks"""
    remaining = end - start + 1
    try:
        async with aiofiles.open(file_path, "rb") as f:
            await f.seek(start)
            while remaining > 0:
                chunk = await f.read(min(chunk_size, remaining))
                if not chunk:
                    break
                remaining -= len(chunk)
                yield chunk
    except OSError as e:
        # Headers are already on the wire; re-raising aborts the connection
        logger.error("Video stream interrupted", file_path=str(file_path), error=str(e), remaining=remaining)
        raise


async def build_stream_response(
    file_path: Path,
    range_header: Optional[str],
    chunk_size: int = 64 * 1024,
    content_type: str = "video/mp4"
) -> StreamingResponse:
    """
    Build a 200 or 206 streaming response for a stored video

    Raises:
        VideoNotFoundError: If the backing file is missing
        RangeNotSatisfiableError: If the Range header cannot be served
        StorageError: If the file cannot be inspected
    """
    try:
        file_size = (await run_in_threadpool(file_path.stat)).st_size
    except FileNotFoundError:
        raise VideoNotFoundError()
    except OSError as e:
        logger.error("Failed to stat video file", file_path=str(file_path), error=str(e))
        raise StorageError("Error streaming video", operation="stat")

    byte_range = parse_range_header(range_header, file_size) if range_header else None

    headers = {
        "Accept-Ranges": "bytes",
        "Content-Type": content_type,
    }

    if byte_range is None:
        headers["Content-Length"] = str(file_size)
        return StreamingResponse(
            iter_file_range(file_path, 0, file_size - 1, chunk_size),
            status_code=status.HTTP_200_OK,
            headers=headers,
            media_type=content_type
        )

    headers["Content-Range"] = byte_range.content_range(file_size)
    headers["Content-Length"] = str(byte_range.length)
    logger.debug("Serving byte range", file_path=str(file_path), content_range=headers["Content-Range"])

    return StreamingResponse(
        iter_file_range(file_path, byte_range.start, byte_range.end, chunk_size),
        status_code=status.HTTP_206_PARTIAL_CONTENT,
        headers=headers,
        media_type=content_type
    )
