"""
Chunk Sources and Sinks

Small helpers for feeding byte chunks into a transform and collecting
its output. Sinks expose ``write(chunk)`` and ``close()``; ``close()``
returns only once everything written has been flushed.
"""

import io
from typing import AsyncIterator, BinaryIO, Iterator, Optional

from .config import get_settings


def _resolve_chunk_size(chunk_size: Optional[int]) -> int:
    size = chunk_size if chunk_size is not None else get_settings().chunk_size
    if size <= 0:
        raise ValueError(f"Chunk size must be positive, got {size}")
    return size


def iter_chunks(data: bytes, chunk_size: Optional[int] = None) -> Iterator[bytes]:
    """
    Split ``data`` into consecutive chunks.

    Args:
        data: Bytes-like buffer to split
        chunk_size: Chunk length in bytes (defaults to settings.chunk_size)

    Yields:
        Chunks of at most ``chunk_size`` bytes; nothing for empty data
    """
    size = _resolve_chunk_size(chunk_size)
    view = memoryview(data)
    for offset in range(0, len(view), size):
        yield bytes(view[offset:offset + size])


async def aiter_chunks(data: bytes, chunk_size: Optional[int] = None) -> AsyncIterator[bytes]:
    """Async variant of :func:`iter_chunks`."""
    for chunk in iter_chunks(data, chunk_size):
        yield chunk


def read_chunks(fileobj: BinaryIO, chunk_size: Optional[int] = None) -> Iterator[bytes]:
    """Read ``fileobj`` until EOF, one chunk at a time."""
    size = _resolve_chunk_size(chunk_size)
    while True:
        chunk = fileobj.read(size)
        if not chunk:
            break
        yield chunk


class BufferSink:
    """Collects written chunks in memory."""

    def __init__(self):
        self._buffer = io.BytesIO()
        self.closed = False

    def write(self, chunk: bytes) -> None:
        if self.closed:
            raise ValueError("write to closed sink")
        self._buffer.write(chunk)

    def close(self) -> None:
        self.closed = True

    def getvalue(self) -> bytes:
        return self._buffer.getvalue()


class FileSink:
    """Writes chunks to a binary file object."""

    def __init__(self, fileobj: BinaryIO, close_file: bool = False):
        self._fileobj = fileobj
        self._close_file = close_file
        self.closed = False
        self.bytes_written = 0

    def write(self, chunk: bytes) -> None:
        if self.closed:
            raise ValueError("write to closed sink")
        self._fileobj.write(chunk)
        self.bytes_written += len(chunk)

    def close(self) -> None:
        if self.closed:
            return
        self._fileobj.flush()
        if self._close_file:
            self._fileobj.close()
        self.closed = True
