"""Buffered exact-length reads over an asyncio stream."""

import asyncio
from typing import Optional

from .types import ReaderBusyError, ShortReadError

# Upper bound for a single transport read
CHUNK_SIZE = 64 * 1024


class StreamReader:
    """
    Read exactly N bytes at a time from an ordered byte stream.

    Bytes are accumulated in an internal buffer as the transport delivers
    them. A read returns the first N buffered bytes and keeps the rest for the
    next call, so protocol code can be written as a straight sequence of
    fixed-size reads.

    Only one read may be pending at a time.
    """

    def __init__(self, stream: asyncio.StreamReader, timeout: Optional[float] = None) -> None:
        """
        Args:
            stream: The underlying asyncio stream.
            timeout: Seconds allowed per read, or None to wait forever.
        """
        self._stream = stream
        self._buffer = bytearray()
        self._pending = False
        self.timeout = timeout

    @property
    def buffered(self) -> int:
        """Number of bytes received but not yet consumed."""
        return len(self._buffer)

    async def read(self, n: int) -> bytes:
        """
        Wait for and return exactly ``n`` bytes.

        Raises:
            ReaderBusyError: If another read is pending.
            ShortReadError: If the stream ends or fails before ``n`` bytes arrive.
            TimeoutError: If the bytes don't arrive within ``timeout`` seconds.
        """
        if n < 0:
            raise ValueError(f"Cannot read a negative number of bytes: {n}")
        if self._pending:
            raise ReaderBusyError()

        self._pending = True
        try:
            if self.timeout is None:
                return await self._read_exactly(n)
            return await asyncio.wait_for(self._read_exactly(n), self.timeout)
        finally:
            self._pending = False

    async def _read_exactly(self, n: int) -> bytes:
        while len(self._buffer) < n:
            try:
                chunk = await self._stream.read(max(n - len(self._buffer), CHUNK_SIZE))
            except OSError as e:
                raise ShortReadError(len(self._buffer), n, str(e)) from e
            if not chunk:
                raise ShortReadError(len(self._buffer), n)
            self._buffer += chunk

        data = bytes(self._buffer[:n])
        del self._buffer[:n]
        return data
