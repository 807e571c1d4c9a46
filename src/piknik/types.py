"""Protocol constants and error types for piknik."""

from typing import Optional


# Protocol constants
PROTOCOL_VERSION = 6
DOMAIN_STR = b"PK"
PERSON = DOMAIN_STR.ljust(16, b"\x00")  # BLAKE2b personalization
SALT_SIZE = 16

OPCODE_STORE = 0x53  # 'S'
OPCODE_GET = 0x47  # 'G'
OPCODE_MOVE = 0x4D  # 'M'

# Sizes
HASH_SIZE = 32
CHALLENGE_SIZE = 32
KEY_SIZE = 32
KEY_ID_SIZE = 8
NONCE_SIZE = 24
SIGNATURE_SIZE = 64
TIMESTAMP_SIZE = 8

HELLO_SIZE = 1 + CHALLENGE_SIZE + HASH_SIZE  # 65
STORE_HEADER_SIZE = 1 + HASH_SIZE + 8 + TIMESTAMP_SIZE + SIGNATURE_SIZE  # 113
GET_REQUEST_SIZE = 1 + HASH_SIZE  # 33
GET_RESPONSE_HEADER_SIZE = HASH_SIZE + 8 + TIMESTAMP_SIZE + SIGNATURE_SIZE  # 112
MIN_PAYLOAD_SIZE = KEY_ID_SIZE + NONCE_SIZE  # 32

# Defaults
DEFAULT_CONNECT = "127.0.0.1:8075"
DEFAULT_TIMEOUT_SECS = 10
DEFAULT_DATA_TIMEOUT_SECS = 3600
DEFAULT_TTL_SECS = 7 * 24 * 3600


# Exception types
class PiknikError(Exception):
    """Base exception for piknik errors.

    The message is the human-readable detail; ``kind`` is a short stable
    identifier callers can switch on.
    """
    kind = "error"

    @property
    def detail(self) -> str:
        return str(self)


class ConfigError(PiknikError):
    """Invalid client configuration."""
    kind = "config"

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        super().__init__(f"{key}: {reason}")


class ConnectionFailedError(PiknikError):
    """Connection refused, unreachable or timed out while connecting."""
    kind = "connection"

    def __init__(self, host: str, port: int, reason: str) -> None:
        self.host = host
        self.port = port
        super().__init__(
            f"Unable to connect to {host}:{port} - "
            f"Is a Piknik server running on that host? ({reason})"
        )


class VersionMismatchError(PiknikError):
    """The server speaks a different protocol version."""
    kind = "version_mismatch"

    def __init__(
        self,
        client_version: int,
        server_version: Optional[int],
        message: Optional[str] = None,
    ) -> None:
        self.client_version = client_version
        self.server_version = server_version
        super().__init__(
            message
            or f"Incompatible server version (client: {client_version}, server: {server_version})"
        )


class ServerRejectedError(VersionMismatchError):
    """The server closed the connection or stayed silent instead of answering the hello."""

    def __init__(self, client_version: int) -> None:
        super().__init__(
            client_version,
            None,
            "The server rejected the connection - Check that it is running "
            "the same Piknik version or retry later",
        )


class HandshakeAuthError(PiknikError):
    """The server's handshake tag (h1) does not verify."""
    kind = "handshake_auth"

    def __init__(self) -> None:
        super().__init__("Incorrect authentication code")


class StageAuthError(PiknikError):
    """The server's confirmation tag (h3) does not verify."""
    kind = "stage_auth"

    def __init__(self) -> None:
        super().__init__("Incorrect authentication code from server")


class TransportError(PiknikError):
    """I/O failure on an established connection."""
    kind = "transport"


class ShortReadError(TransportError):
    """The connection ended before the requested number of bytes arrived."""

    def __init__(self, received: int, expected: int, reason: Optional[str] = None) -> None:
        self.received = received
        self.expected = expected
        message = f"Connection closed after {received} bytes (expected {expected})"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ReaderBusyError(PiknikError):
    """A read was issued while another one is still pending."""
    kind = "reader_busy"

    def __init__(self) -> None:
        super().__init__("A read is already pending on this connection")


class TransferTimeoutError(PiknikError):
    """Timed out while transferring the payload."""
    kind = "transfer_timeout"

    def __init__(self, timeout_ms: int) -> None:
        self.timeout_ms = timeout_ms
        super().__init__(f"Transfer timed out after {timeout_ms} ms")


class EmptyOrUnavailableError(PiknikError):
    """No response header was received for a fetch."""
    kind = "empty"

    def __init__(self) -> None:
        super().__init__("The clipboard might be empty")


class ExpiredContentError(PiknikError):
    """The retrieved content is older than the configured TTL."""
    kind = "expired"

    def __init__(self, age_secs: int, ttl_secs: int) -> None:
        self.age_secs = age_secs
        self.ttl_secs = ttl_secs
        super().__init__(
            f"Clipboard content is too old ({age_secs}s, ttl {ttl_secs}s)"
        )


class MalformedResponseError(PiknikError):
    """The server announced a payload too short to be valid."""
    kind = "malformed"

    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(
            f"Clipboard content is too short: {length} bytes "
            f"(minimum {MIN_PAYLOAD_SIZE})"
        )


class KeyIdMismatchError(PiknikError):
    """The payload was encrypted under a different key."""
    kind = "key_id_mismatch"

    def __init__(self, expected: bytes, received: bytes) -> None:
        self.expected = expected
        self.received = received
        super().__init__(
            f"Encryption key ID mismatch (expected {expected.hex()}, got {received.hex()})"
        )


class SignatureError(PiknikError):
    """The payload signature doesn't verify."""
    kind = "signature"

    def __init__(self, reason: str = "Signature doesn't verify") -> None:
        super().__init__(reason)
