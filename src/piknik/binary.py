"""Little-endian integer codec and byte helpers for the piknik wire format."""

import struct

_U64_LE = struct.Struct("<Q")


def encode_u64_le(value: int) -> bytes:
    """Encode an unsigned 64-bit integer as 8 little-endian bytes."""
    if value < 0 or value >= 1 << 64:
        raise ValueError(f"Value out of range for uint64: {value}")
    return _U64_LE.pack(value)


def decode_u64_le(data: bytes, offset: int = 0) -> int:
    """Decode an unsigned 64-bit little-endian integer at ``offset``."""
    if offset < 0 or len(data) < offset + 8:
        raise ValueError(
            f"Need 8 bytes at offset {offset}, got {max(len(data) - offset, 0)}"
        )
    (value,) = _U64_LE.unpack_from(data, offset)
    return value


def concat(*parts: bytes) -> bytes:
    """Concatenate byte sequences in order; empty parts are allowed."""
    return b"".join(parts)


def constant_time_equal(a: bytes, b: bytes) -> bool:
    """
    Compare two byte sequences without leaking where they differ.

    Lengths are not secret: a length mismatch returns False immediately.
    Otherwise every byte pair is visited before deciding.
    """
    if len(a) != len(b):
        return False
    acc = 0
    for x, y in zip(a, b):
        acc |= x ^ y
    return acc == 0
