"""Client configuration for piknik."""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from .keys import derive_key_id, key_id_from_int
from .types import (
    DEFAULT_CONNECT,
    DEFAULT_DATA_TIMEOUT_SECS,
    DEFAULT_TIMEOUT_SECS,
    DEFAULT_TTL_SECS,
    KEY_ID_SIZE,
    KEY_SIZE,
    ConfigError,
)

CONFIG_ENV_VAR = "PIKNIK_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".piknik.json"


@dataclass(frozen=True)
class PiknikConfig:
    """Validated settings consumed by the protocol client."""

    host: str
    """Server host name or address."""

    port: int
    """Server TCP port."""

    psk: bytes
    """Pre-shared key keying the authentication tags (32 bytes)."""

    sign_pk: bytes
    """Ed25519 public key verifying retrieved content (32 bytes)."""

    sign_sk: bytes
    """Ed25519 seed signing stored content (32 bytes)."""

    encrypt_sk: bytes
    """Symmetric content encryption key (32 bytes)."""

    encrypt_sk_id: bytes
    """Public identifier of encrypt_sk (8 bytes)."""

    timeout_ms: Optional[int] = DEFAULT_TIMEOUT_SECS * 1000
    """Timeout for connecting and for the handshake, or None for no limit."""

    data_timeout_ms: Optional[int] = DEFAULT_DATA_TIMEOUT_SECS * 1000
    """Timeout for payload transfer once authenticated, or None for no limit."""

    ttl_secs: int = DEFAULT_TTL_SECS
    """Maximum age of retrieved content."""

    def __post_init__(self) -> None:
        for name in ("psk", "sign_pk", "sign_sk", "encrypt_sk"):
            value = getattr(self, name)
            if len(value) != KEY_SIZE:
                raise ValueError(f"{name} must be {KEY_SIZE} bytes, got {len(value)}")
        if len(self.encrypt_sk_id) != KEY_ID_SIZE:
            raise ValueError(
                f"encrypt_sk_id must be {KEY_ID_SIZE} bytes, got {len(self.encrypt_sk_id)}"
            )
        if not 0 < self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}")

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> "PiknikConfig":
        """
        Build a configuration from user settings.

        Keys are given as 64-character hex strings, timeouts and TTL in
        seconds. A timeout of 0 means no limit. ``encrypt_sk_id`` is an
        explicit positive integer id, or 0 to derive it from ``encrypt_sk``.

        Raises:
            ConfigError: If a setting is missing or invalid.
        """
        host, port = _parse_connect(settings.get("connect", DEFAULT_CONNECT))
        psk = _parse_key(settings, "psk")
        sign_pk = _parse_key(settings, "sign_pk")
        sign_sk = _parse_key(settings, "sign_sk")
        encrypt_sk = _parse_key(settings, "encrypt_sk")

        key_id_num = _parse_int(settings, "encrypt_sk_id", 0)
        try:
            encrypt_sk_id = (
                key_id_from_int(key_id_num) if key_id_num > 0 else derive_key_id(encrypt_sk)
            )
        except ValueError as e:
            raise ConfigError("encrypt_sk_id", str(e)) from e

        return cls(
            host=host,
            port=port,
            psk=psk,
            sign_pk=sign_pk,
            sign_sk=sign_sk,
            encrypt_sk=encrypt_sk,
            encrypt_sk_id=encrypt_sk_id,
            timeout_ms=_parse_timeout(settings, "timeout", DEFAULT_TIMEOUT_SECS),
            data_timeout_ms=_parse_timeout(settings, "data_timeout", DEFAULT_DATA_TIMEOUT_SECS),
            ttl_secs=_parse_int(settings, "ttl", DEFAULT_TTL_SECS),
        )


def _parse_connect(connect: Any):
    if not isinstance(connect, str):
        raise ConfigError("connect", f"expected 'host:port', got {connect!r}")
    host, sep, port_str = connect.rpartition(":")
    host = host.strip("[]")
    if not sep or not host or not port_str.isdigit():
        raise ConfigError("connect", f"invalid connect address: {connect}")
    port = int(port_str)
    if not 0 < port < 65536:
        raise ConfigError("connect", f"port out of range: {port}")
    return host, port


def _parse_key(settings: Mapping[str, Any], key: str) -> bytes:
    value = settings.get(key)
    if not isinstance(value, str) or len(value) != KEY_SIZE * 2:
        raise ConfigError(key, f"must be a {KEY_SIZE * 2}-character hex string ({KEY_SIZE} bytes)")
    try:
        return bytes.fromhex(value)
    except ValueError as e:
        raise ConfigError(key, f"invalid hex: {e}") from e


def _parse_int(settings: Mapping[str, Any], key: str, default: int) -> int:
    value = settings.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigError(key, f"must be a non-negative integer, got {value!r}")
    return value


def _parse_timeout(settings: Mapping[str, Any], key: str, default_secs: int) -> Optional[int]:
    # 0 disables the timeout
    secs = _parse_int(settings, key, default_secs)
    return secs * 1000 if secs else None


def default_config_path() -> Path:
    """Configuration file location: $PIKNIK_CONFIG, else ~/.piknik.json."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    return Path(env_path) if env_path else DEFAULT_CONFIG_PATH


def load_config(path: Optional[Union[str, Path]] = None) -> PiknikConfig:
    """
    Load a JSON configuration file.

    Raises:
        ConfigError: If the file can't be read or holds invalid settings.
    """
    config_path = Path(path) if path is not None else default_config_path()
    try:
        settings = json.loads(config_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(str(config_path), f"cannot read configuration: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(str(config_path), f"invalid JSON: {e}") from e

    if not isinstance(settings, dict):
        raise ConfigError(str(config_path), "expected a JSON object")
    return PiknikConfig.from_settings(settings)
