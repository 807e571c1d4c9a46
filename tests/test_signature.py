"""Tests for signature module."""

import os
import pytest

from piknik.keys import generate_signing_keypair
from piknik.signature import sign, verify
from piknik.types import SIGNATURE_SIZE, SignatureError
from .test_vectors import SIGN_PK, SIGN_SK


class TestSignAndVerify:
    """Tests for sign and verify roundtrip."""

    def test_sign_and_verify_with_test_keys(self):
        """Test that the configured seed and public key belong together."""
        message = b"test message"
        signature = sign(SIGN_SK, message)
        assert len(signature) == SIGNATURE_SIZE
        assert verify(SIGN_PK, message, signature) is True

    def test_sign_and_verify_random_key(self):
        seed, public_key = generate_signing_keypair()
        message = os.urandom(100)
        assert verify(public_key, message, sign(seed, message)) is True

    def test_verify_wrong_key_fails(self):
        """Test that verification fails with wrong key."""
        _, other_public_key = generate_signing_keypair()
        signature = sign(SIGN_SK, b"test message")
        assert verify(other_public_key, b"test message", signature) is False

    def test_verify_wrong_message_fails(self):
        """Test that verification fails with wrong message."""
        signature = sign(SIGN_SK, b"test message")
        assert verify(SIGN_PK, b"wrong message", signature) is False

    def test_verify_corrupted_signature_fails(self):
        signature = bytearray(sign(SIGN_SK, b"test message"))
        signature[0] ^= 0xFF
        assert verify(SIGN_PK, b"test message", bytes(signature)) is False


class TestErrorHandling:
    """Tests for error handling."""

    def test_invalid_signing_key_length(self):
        with pytest.raises(SignatureError):
            sign(bytes(16), b"data")

    def test_invalid_signature_length(self):
        with pytest.raises(SignatureError):
            verify(SIGN_PK, b"data", bytes(32))

    def test_invalid_public_key_length(self):
        with pytest.raises(SignatureError):
            verify(bytes(16), b"data", bytes(64))
