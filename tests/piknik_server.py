"""In-process piknik server used as a test double for the client."""

import asyncio
import os
from dataclasses import dataclass
from typing import Optional

from piknik.auth import auth0, auth1, auth2get, auth2store, auth3get, auth3store
from piknik.binary import concat, constant_time_equal, decode_u64_le, encode_u64_le
from piknik.types import OPCODE_GET, OPCODE_MOVE, OPCODE_STORE, PROTOCOL_VERSION


@dataclass
class StoredContent:
    """What the server holds: the client's timestamp, signature and payload."""
    ts: bytes
    signature: bytes
    payload: bytes


class PiknikTestServer:
    """
    Minimal piknik server.

    Attributes toggle misbehaviour:
        version: Version announced in the server hello.
        silent: Never answer the client hello.
        tamper_h1 / tamper_h3: Corrupt the server's authentication tags.
        length_override: Announce this payload length instead of the real
            one and send no payload.
        stall: Stop after the request header. A store is never read or
            confirmed; a fetch announces its payload but never sends it.
    """

    def __init__(self, psk: bytes) -> None:
        self.psk = psk
        self.version = PROTOCOL_VERSION
        self.silent = False
        self.tamper_h1 = False
        self.tamper_h3 = False
        self.length_override: Optional[int] = None
        self.stall = False
        self.content: Optional[StoredContent] = None
        self.connections = 0
        self.rejected = 0
        self._server: Optional[asyncio.AbstractServer] = None
        self._released = asyncio.Event()

    @property
    def port(self) -> int:
        return self._server.sockets[0].getsockname()[1]

    async def start(self) -> None:
        self._server = await asyncio.start_server(self._handle, "127.0.0.1", 0)

    async def close(self) -> None:
        self._released.set()
        self._server.close()
        await self._server.wait_closed()

    async def _handle(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        self.connections += 1
        try:
            await self._serve(reader, writer)
        except (asyncio.IncompleteReadError, ConnectionError):
            pass
        finally:
            writer.close()

    async def _serve(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        hello = await reader.readexactly(65)
        version, r, h0 = hello[0], hello[1:33], hello[33:65]
        if version != PROTOCOL_VERSION or not constant_time_equal(h0, auth0(self.psk, version, r)):
            self.rejected += 1
            return
        if self.silent:
            await reader.read()
            return

        r2 = os.urandom(32)
        h1 = auth1(self.psk, version, h0, r2)
        if self.tamper_h1:
            h1 = bytes(32)
        writer.write(concat(bytes([self.version]), r2, h1))
        await writer.drain()

        opcode = (await reader.readexactly(1))[0]
        if opcode == OPCODE_STORE:
            await self._store(reader, writer, h1)
        elif opcode in (OPCODE_GET, OPCODE_MOVE):
            await self._get(reader, writer, h1, opcode)
        else:
            self.rejected += 1

    async def _store(self, reader, writer, h1: bytes) -> None:
        header = await reader.readexactly(32 + 8 + 8 + 64)
        h2 = header[:32]
        length = decode_u64_le(header, 32)
        ts = header[40:48]
        signature = header[48:112]
        if not constant_time_equal(h2, auth2store(self.psk, h1, OPCODE_STORE, ts, signature)):
            self.rejected += 1
            return
        if self.stall:
            await self._released.wait()
            return

        payload = await reader.readexactly(length)
        self.content = StoredContent(ts=ts, signature=signature, payload=payload)

        h3 = auth3store(self.psk, h2)
        if self.tamper_h3:
            h3 = bytes(32)
        writer.write(h3)
        await writer.drain()

    async def _get(self, reader, writer, h1: bytes, opcode: int) -> None:
        h2 = await reader.readexactly(32)
        if not constant_time_equal(h2, auth2get(self.psk, h1, opcode)):
            self.rejected += 1
            return

        content = self.content
        if content is None:
            return
        if opcode == OPCODE_MOVE:
            self.content = None

        h3 = auth3get(self.psk, h2, content.ts, content.signature)
        if self.tamper_h3:
            h3 = bytes(32)

        if self.length_override is not None:
            writer.write(
                concat(h3, encode_u64_le(self.length_override), content.ts, content.signature)
            )
            await writer.drain()
            await reader.read()
            return

        writer.write(
            concat(h3, encode_u64_le(len(content.payload)), content.ts, content.signature)
        )
        if self.stall:
            await writer.drain()
            await self._released.wait()
            return
        writer.write(content.payload)
        await writer.drain()
