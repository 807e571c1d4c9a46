"""
Piknik clipboard client.

The ClipboardClient stores, fetches and moves the single clipboard blob held
by a piknik server. Every call opens its own connection, authenticates, runs
one operation and closes the connection again, whatever the outcome.

Example usage:
    ```python
    client = ClipboardClient(load_config())

    await client.store(b"hello piknik")
    data = await client.fetch()       # content stays on the server
    data = await client.move()        # content is deleted server-side
    ```
"""

import asyncio
import logging
import time

from .auth import auth2get, auth2store, auth3get, auth3store
from .binary import concat, constant_time_equal, decode_u64_le, encode_u64_le
from .config import PiknikConfig
from .crypto import encrypt_and_sign, verify_and_decrypt
from .handshake import Session, open_session
from .types import (
    GET_RESPONSE_HEADER_SIZE,
    HASH_SIZE,
    MIN_PAYLOAD_SIZE,
    OPCODE_GET,
    OPCODE_MOVE,
    OPCODE_STORE,
    TIMESTAMP_SIZE,
    EmptyOrUnavailableError,
    ExpiredContentError,
    MalformedResponseError,
    PiknikError,
    StageAuthError,
    TransferTimeoutError,
    TransportError,
)

logger = logging.getLogger(__name__)


class ClipboardClient:
    """High-level client for a piknik server."""

    def __init__(self, config: PiknikConfig) -> None:
        """
        Initialize the client.

        Args:
            config: Validated connection and key settings.
        """
        self.config = config

    def _session(self):
        return open_session(
            self.config.host,
            self.config.port,
            self.config.psk,
            self.config.timeout_ms,
        )

    async def _transfer(self, coro):
        """Await a read or write issued after the switch to the data timeout."""
        try:
            return await coro
        except asyncio.TimeoutError as e:
            raise TransferTimeoutError(self.config.data_timeout_ms) from e

    async def store(self, data: bytes) -> None:
        """
        Encrypt, sign and store data as the new clipboard content.

        Raises:
            PiknikError: If the connection, the handshake or the server's
                confirmation fails.
        """
        config = self.config
        async with self._session() as session:
            ts = encode_u64_le(int(time.time()))
            payload, signature = encrypt_and_sign(
                config.encrypt_sk, config.encrypt_sk_id, config.sign_sk, data
            )

            session.set_timeout(config.data_timeout_ms)

            opcode = OPCODE_STORE
            h2 = auth2store(config.psk, session.h1, opcode, ts, signature)
            header = concat(
                bytes([opcode]),
                h2,
                encode_u64_le(len(payload)),
                ts,
                signature,
            )
            logger.debug("Storing %d bytes (%d on the wire)", len(data), len(payload))
            await self._transfer(session.send(header, payload))

            h3 = await self._transfer(session.reader.read(HASH_SIZE))
            wh3 = auth3store(config.psk, h2)
            if not constant_time_equal(wh3, h3):
                raise StageAuthError()

    async def fetch(self, is_move: bool = False) -> bytes:
        """
        Retrieve the clipboard content.

        Args:
            is_move: Ask the server to delete the content after sending it.

        Returns:
            The decrypted content.

        Raises:
            EmptyOrUnavailableError: If the server sends no content.
            ExpiredContentError: If the content is older than the TTL.
            PiknikError: If authentication, verification or transfer fails.
        """
        async with self._session() as session:
            return await self._fetch(session, OPCODE_MOVE if is_move else OPCODE_GET)

    async def move(self) -> bytes:
        """Retrieve the clipboard content and have the server delete it."""
        return await self.fetch(is_move=True)

    async def _fetch(self, session: Session, opcode: int) -> bytes:
        config = self.config
        h2 = auth2get(config.psk, session.h1, opcode)
        logger.debug("Sending %s request", chr(opcode))
        try:
            await session.send(bytes([opcode]), h2)
        except asyncio.TimeoutError as e:
            raise TransportError("Timed out sending request") from e

        try:
            header = await session.reader.read(GET_RESPONSE_HEADER_SIZE)
        except (asyncio.TimeoutError, PiknikError) as e:
            raise EmptyOrUnavailableError() from e

        h3 = header[:HASH_SIZE]
        payload_len = decode_u64_le(header, HASH_SIZE)
        ts = header[HASH_SIZE + 8 : HASH_SIZE + 8 + TIMESTAMP_SIZE]
        signature = header[HASH_SIZE + 8 + TIMESTAMP_SIZE :]

        wh3 = auth3get(config.psk, h2, ts, signature)
        if not constant_time_equal(wh3, h3):
            raise StageAuthError()

        age = int(time.time()) - decode_u64_le(ts)
        if age >= config.ttl_secs:
            raise ExpiredContentError(age, config.ttl_secs)

        if payload_len < MIN_PAYLOAD_SIZE:
            raise MalformedResponseError(payload_len)

        session.set_timeout(config.data_timeout_ms)
        logger.debug("Receiving %d bytes", payload_len)
        payload = await self._transfer(session.reader.read(payload_len))

        return verify_and_decrypt(
            config.encrypt_sk,
            config.encrypt_sk_id,
            config.sign_pk,
            payload,
            signature,
        )


async def copy_to_server(config: PiknikConfig, data: bytes) -> None:
    """Store data using a one-off client."""
    await ClipboardClient(config).store(data)


async def paste_from_server(config: PiknikConfig, is_move: bool = False) -> bytes:
    """Fetch (or move, with ``is_move``) the content using a one-off client."""
    return await ClipboardClient(config).fetch(is_move)
