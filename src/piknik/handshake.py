"""
Connection setup and mutual authentication.

Client and server prove knowledge of the pre-shared key to each other:

    client -> server: version(1) || r(32) || h0(32)
    server -> client: version(1) || r2(32) || h1(32)

where h0 = auth0(psk, version, r) and h1 = auth1(psk, version, h0, r2).
h1 then seeds the operation-specific tags.
"""

import asyncio
import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from .auth import auth0, auth1
from .binary import concat, constant_time_equal
from .stream import StreamReader
from .types import (
    CHALLENGE_SIZE,
    HELLO_SIZE,
    PROTOCOL_VERSION,
    ConnectionFailedError,
    HandshakeAuthError,
    ServerRejectedError,
    TransportError,
    VersionMismatchError,
)

logger = logging.getLogger(__name__)


def _seconds(timeout_ms: Optional[int]) -> Optional[float]:
    return None if timeout_ms is None else timeout_ms / 1000


class Session:
    """An authenticated, single-use connection to a piknik server."""

    def __init__(
        self,
        reader: StreamReader,
        writer: asyncio.StreamWriter,
        h1: bytes,
        timeout_ms: Optional[int],
    ) -> None:
        self.reader = reader
        self.writer = writer
        self.h1 = h1
        self.timeout_ms = timeout_ms
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def set_timeout(self, timeout_ms: Optional[int]) -> None:
        """Change the timeout applied to every following read and write."""
        self.timeout_ms = timeout_ms
        self.reader.timeout = _seconds(timeout_ms)

    async def send(self, *parts: bytes) -> None:
        """Write parts in order and wait for the transport to accept them."""
        for part in parts:
            self.writer.write(part)
        try:
            await asyncio.wait_for(self.writer.drain(), _seconds(self.timeout_ms))
        except OSError as e:
            raise TransportError(f"Write failed: {e}") from e

    async def close(self) -> None:
        """
        Drop the connection. Calling it again does nothing.

        The transport is aborted rather than closed: unsent bytes are
        discarded, so a peer that stopped reading can't hold the close open.
        """
        if self._closed:
            return
        self._closed = True
        self.writer.transport.abort()
        try:
            await self.writer.wait_closed()
        except OSError as e:
            logger.debug("Error while closing connection: %s", e)


async def _connect(host: str, port: int, timeout_ms: Optional[int]):
    try:
        return await asyncio.wait_for(
            asyncio.open_connection(host, port), _seconds(timeout_ms)
        )
    except asyncio.TimeoutError as e:
        raise ConnectionFailedError(host, port, "connection timed out") from e
    except OSError as e:
        raise ConnectionFailedError(host, port, e.strerror or str(e)) from e


async def perform_handshake(
    host: str,
    port: int,
    psk: bytes,
    timeout_ms: Optional[int],
    version: int = PROTOCOL_VERSION,
) -> Session:
    """
    Connect to a server and run the mutual authentication handshake.

    The connection is closed before any error propagates.

    Args:
        host: Server host name or address.
        port: Server TCP port.
        psk: 32-byte pre-shared key.
        timeout_ms: Timeout for connecting and for each handshake read.
        version: Protocol version to announce.

    Returns:
        An authenticated Session holding h1.

    Raises:
        ConnectionFailedError: If the server can't be reached.
        ServerRejectedError: If the server doesn't answer the hello.
        VersionMismatchError: If the server speaks another version.
        HandshakeAuthError: If the server's h1 doesn't verify.
    """
    stream, writer = await _connect(host, port, timeout_ms)
    reader = StreamReader(stream, _seconds(timeout_ms))
    session = Session(reader, writer, b"", timeout_ms)
    logger.debug("Connected to %s:%d", host, port)

    try:
        r = os.urandom(CHALLENGE_SIZE)
        h0 = auth0(psk, version, r)

        try:
            await session.send(concat(bytes([version]), r, h0))
            server_hello = await reader.read(HELLO_SIZE)
        except (asyncio.TimeoutError, TransportError) as e:
            raise ServerRejectedError(version) from e

        server_version = server_hello[0]
        if server_version != version:
            raise VersionMismatchError(version, server_version)

        r2 = server_hello[1 : 1 + CHALLENGE_SIZE]
        h1 = server_hello[1 + CHALLENGE_SIZE : HELLO_SIZE]

        wh1 = auth1(psk, version, h0, r2)
        if not constant_time_equal(wh1, h1):
            raise HandshakeAuthError()
    except BaseException:
        await session.close()
        raise

    session.h1 = h1
    logger.debug("Handshake with %s:%d complete (version %d)", host, port, version)
    return session


@asynccontextmanager
async def open_session(
    host: str,
    port: int,
    psk: bytes,
    timeout_ms: Optional[int],
    version: int = PROTOCOL_VERSION,
) -> AsyncIterator[Session]:
    """
    Authenticated session scoped to an ``async with`` block.

    The connection is closed on every exit path of the block.
    """
    session = await perform_handshake(host, port, psk, timeout_ms, version)
    try:
        yield session
    finally:
        await session.close()
