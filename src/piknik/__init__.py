"""
piknik - Encrypted network clipboard client

Python implementation of the piknik protocol: BLAKE2b-authenticated handshake,
XChaCha20 content encryption and Ed25519 content signatures.
"""

from .binary import encode_u64_le, decode_u64_le, concat, constant_time_equal
from .auth import auth0, auth1, auth2get, auth2store, auth3get, auth3store
from .keys import derive_key_id, key_id_from_int, public_key_from_seed, generate_signing_keypair
from .crypto import xchacha20_xor, encrypt_and_sign, verify_and_decrypt
from .stream import StreamReader
from .handshake import Session, perform_handshake, open_session
from .config import PiknikConfig, load_config
from .client import ClipboardClient, copy_to_server, paste_from_server
from .types import (
    PROTOCOL_VERSION,
    OPCODE_STORE,
    OPCODE_GET,
    OPCODE_MOVE,
    PiknikError,
    ConfigError,
    ConnectionFailedError,
    VersionMismatchError,
    ServerRejectedError,
    HandshakeAuthError,
    StageAuthError,
    TransportError,
    ShortReadError,
    ReaderBusyError,
    TransferTimeoutError,
    EmptyOrUnavailableError,
    ExpiredContentError,
    MalformedResponseError,
    KeyIdMismatchError,
    SignatureError,
)

__version__ = "0.1.0"

__all__ = [
    # Binary
    "encode_u64_le",
    "decode_u64_le",
    "concat",
    "constant_time_equal",
    # Auth
    "auth0",
    "auth1",
    "auth2get",
    "auth2store",
    "auth3get",
    "auth3store",
    # Keys
    "derive_key_id",
    "key_id_from_int",
    "public_key_from_seed",
    "generate_signing_keypair",
    # Crypto
    "xchacha20_xor",
    "encrypt_and_sign",
    "verify_and_decrypt",
    # Transport
    "StreamReader",
    "Session",
    "perform_handshake",
    "open_session",
    # Config
    "PiknikConfig",
    "load_config",
    # Client
    "ClipboardClient",
    "copy_to_server",
    "paste_from_server",
    # Constants
    "PROTOCOL_VERSION",
    "OPCODE_STORE",
    "OPCODE_GET",
    "OPCODE_MOVE",
    # Errors
    "PiknikError",
    "ConfigError",
    "ConnectionFailedError",
    "VersionMismatchError",
    "ServerRejectedError",
    "HandshakeAuthError",
    "StageAuthError",
    "TransportError",
    "ShortReadError",
    "ReaderBusyError",
    "TransferTimeoutError",
    "EmptyOrUnavailableError",
    "ExpiredContentError",
    "MalformedResponseError",
    "KeyIdMismatchError",
    "SignatureError",
]
