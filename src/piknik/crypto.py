"""Encryption and signing of clipboard payloads."""

import os
from typing import Tuple

from Crypto.Cipher import ChaCha20

from .binary import concat
from .signature import sign, verify
from .types import (
    KEY_ID_SIZE,
    KEY_SIZE,
    MIN_PAYLOAD_SIZE,
    NONCE_SIZE,
    KeyIdMismatchError,
    MalformedResponseError,
    SignatureError,
)


def xchacha20_xor(key: bytes, nonce: bytes, data: bytes) -> bytes:
    """
    Apply the XChaCha20 keystream to data.

    XChaCha20 is an unauthenticated stream cipher, so the same call encrypts
    and decrypts. Integrity must come from somewhere else (here: the Ed25519
    signature over the framed payload).

    Args:
        key: 32-byte symmetric key
        nonce: 24-byte nonce
        data: Plaintext or ciphertext

    Returns:
        Bytes of the same length as data
    """
    if len(key) != KEY_SIZE:
        raise ValueError(f"Key must be {KEY_SIZE} bytes, got {len(key)}")
    if len(nonce) != NONCE_SIZE:
        raise ValueError(f"Nonce must be {NONCE_SIZE} bytes, got {len(nonce)}")

    # A 24-byte nonce selects the XChaCha20 variant
    cipher = ChaCha20.new(key=key, nonce=nonce)
    return cipher.encrypt(data)


def encrypt_and_sign(
    encrypt_sk: bytes,
    encrypt_sk_id: bytes,
    sign_sk: bytes,
    plaintext: bytes,
) -> Tuple[bytes, bytes]:
    """
    Encrypt data for storage and sign the result.

    Args:
        encrypt_sk: 32-byte symmetric encryption key
        encrypt_sk_id: 8-byte identifier of encrypt_sk
        sign_sk: 32-byte Ed25519 seed
        plaintext: Clipboard content

    Returns:
        Tuple of (payload, signature) where payload is
        encrypt_sk_id(8) || nonce(24) || ciphertext
    """
    if len(encrypt_sk_id) != KEY_ID_SIZE:
        raise ValueError(f"Key id must be {KEY_ID_SIZE} bytes, got {len(encrypt_sk_id)}")

    nonce = os.urandom(NONCE_SIZE)
    ciphertext = xchacha20_xor(encrypt_sk, nonce, plaintext)
    payload = concat(encrypt_sk_id, nonce, ciphertext)
    signature = sign(sign_sk, payload)
    return payload, signature


def verify_and_decrypt(
    encrypt_sk: bytes,
    encrypt_sk_id: bytes,
    sign_pk: bytes,
    payload: bytes,
    signature: bytes,
) -> bytes:
    """
    Check and decrypt a payload received from the server.

    The key id is checked first, then the signature; nothing is decrypted
    unless both pass.

    Args:
        encrypt_sk: 32-byte symmetric encryption key
        encrypt_sk_id: Expected 8-byte key identifier
        sign_pk: 32-byte Ed25519 public key of the sender
        payload: encrypt_sk_id(8) || nonce(24) || ciphertext
        signature: 64-byte Ed25519 signature over payload

    Returns:
        The decrypted clipboard content

    Raises:
        MalformedResponseError: If the payload is shorter than its fixed prefix
        KeyIdMismatchError: If the payload was encrypted under another key
        SignatureError: If the signature doesn't verify
    """
    if len(payload) < MIN_PAYLOAD_SIZE:
        raise MalformedResponseError(len(payload))

    received_id = payload[:KEY_ID_SIZE]
    if received_id != encrypt_sk_id:
        raise KeyIdMismatchError(encrypt_sk_id, received_id)

    if not verify(sign_pk, payload, signature):
        raise SignatureError()

    nonce = payload[KEY_ID_SIZE:MIN_PAYLOAD_SIZE]
    ciphertext = payload[MIN_PAYLOAD_SIZE:]
    return xchacha20_xor(encrypt_sk, nonce, ciphertext)
