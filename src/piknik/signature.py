"""
Ed25519 signatures over framed clipboard payloads.

Keys travel as raw bytes (32-byte seed, 32-byte public key), the way they
appear in the client configuration.
"""

from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)
from cryptography.exceptions import InvalidSignature

from .types import KEY_SIZE, SIGNATURE_SIZE, SignatureError


def sign(signing_seed: bytes, data: bytes) -> bytes:
    """
    Sign data with an Ed25519 seed.

    Args:
        signing_seed: The Ed25519 private seed (32 bytes)
        data: The bytes to sign

    Returns:
        The Ed25519 signature (64 bytes)

    Raises:
        SignatureError: If the seed length is invalid
    """
    if len(signing_seed) != KEY_SIZE:
        raise SignatureError(
            f"Signing key must be {KEY_SIZE} bytes, got {len(signing_seed)}"
        )

    return Ed25519PrivateKey.from_private_bytes(signing_seed).sign(data)


def verify(public_key: bytes, data: bytes, signature: bytes) -> bool:
    """
    Verify an Ed25519 signature.

    Args:
        public_key: The Ed25519 public key (32 bytes)
        data: The signed bytes
        signature: The signature to check (64 bytes)

    Returns:
        True if the signature is valid, False otherwise

    Raises:
        SignatureError: If the key or signature is malformed
    """
    if len(public_key) != KEY_SIZE:
        raise SignatureError(
            f"Ed25519 public key must be {KEY_SIZE} bytes, got {len(public_key)}"
        )

    if len(signature) != SIGNATURE_SIZE:
        raise SignatureError(
            f"Signature must be {SIGNATURE_SIZE} bytes, got {len(signature)}"
        )

    try:
        verifying_key = Ed25519PublicKey.from_public_bytes(public_key)
    except ValueError as e:
        raise SignatureError(f"Invalid Ed25519 public key: {e}") from e

    try:
        verifying_key.verify(signature, data)
        return True
    except InvalidSignature:
        return False
