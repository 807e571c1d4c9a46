"""
Keyed authentication tags for the piknik handshake and operations.

Every tag is a 32-byte BLAKE2b hash keyed with the pre-shared key, personalized
with the protocol domain and salted with the stage number (0 to 3). Each stage
binds the tag to the previous one, so h0 -> h1 -> h2 -> h3 form a chain that
only a holder of the PSK can extend.
"""

import hashlib

from .binary import concat
from .types import HASH_SIZE, PERSON, SALT_SIZE


def _salt(stage: int) -> bytes:
    return bytes([stage]).ljust(SALT_SIZE, b"\x00")


def _keyed_hash(psk: bytes, stage: int, *parts: bytes) -> bytes:
    return hashlib.blake2b(
        concat(*parts),
        digest_size=HASH_SIZE,
        key=psk,
        salt=_salt(stage),
        person=PERSON,
    ).digest()


def auth0(psk: bytes, version: int, r: bytes) -> bytes:
    """Client hello tag: H0(version || r)."""
    return _keyed_hash(psk, 0, bytes([version]), r)


def auth1(psk: bytes, version: int, h0: bytes, r2: bytes) -> bytes:
    """Server hello tag: H1(version || r2 || h0)."""
    return _keyed_hash(psk, 1, bytes([version]), r2, h0)


def auth2get(psk: bytes, h1: bytes, opcode: int) -> bytes:
    """Get/move request tag: H2(h1 || opcode)."""
    return _keyed_hash(psk, 2, h1, bytes([opcode]))


def auth2store(psk: bytes, h1: bytes, opcode: int, ts: bytes, signature: bytes) -> bytes:
    """Store request tag: H2(h1 || opcode || ts || signature)."""
    return _keyed_hash(psk, 2, h1, bytes([opcode]), ts, signature)


def auth3get(psk: bytes, h2: bytes, ts: bytes, signature: bytes) -> bytes:
    """Get/move response tag: H3(h2 || ts || signature)."""
    return _keyed_hash(psk, 3, h2, ts, signature)


def auth3store(psk: bytes, h2: bytes) -> bytes:
    """Store confirmation tag: H3(h2)."""
    return _keyed_hash(psk, 3, h2)
