"""Key identifiers and Ed25519 key helpers for piknik."""

import hashlib
from typing import Tuple

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from .binary import encode_u64_le
from .types import KEY_ID_SIZE, KEY_SIZE, PERSON


def derive_key_id(encrypt_sk: bytes) -> bytes:
    """
    Derive the public 8-byte identifier of a symmetric encryption key.

    The identifier is an unkeyed BLAKE2b hash of the key, personalized with the
    protocol domain, with the most significant bit of the last byte cleared.
    It is safe to send in the clear.

    Args:
        encrypt_sk: The 32-byte symmetric encryption key

    Returns:
        8-byte key identifier
    """
    if len(encrypt_sk) != KEY_SIZE:
        raise ValueError(f"Encryption key must be {KEY_SIZE} bytes, got {len(encrypt_sk)}")

    key_id = bytearray(
        hashlib.blake2b(encrypt_sk, digest_size=KEY_ID_SIZE, person=PERSON).digest()
    )
    key_id[-1] &= 0x7F
    return bytes(key_id)


def key_id_from_int(value: int) -> bytes:
    """Encode an explicitly configured numeric key id as 8 little-endian bytes."""
    return encode_u64_le(value)


def public_key_from_seed(seed: bytes) -> bytes:
    """Compute the raw Ed25519 public key for a 32-byte signing seed."""
    if len(seed) != KEY_SIZE:
        raise ValueError(f"Seed must be {KEY_SIZE} bytes, got {len(seed)}")
    return Ed25519PrivateKey.from_private_bytes(seed).public_key().public_bytes_raw()


def generate_signing_keypair() -> Tuple[bytes, bytes]:
    """
    Generate a fresh Ed25519 identity.

    Returns:
        Tuple of (seed, public_key), both 32 raw bytes
    """
    private_key = Ed25519PrivateKey.generate()
    return private_key.private_bytes_raw(), private_key.public_key().public_bytes_raw()
