"""Shared fixtures for the piknik tests."""

from dataclasses import replace

import pytest
import pytest_asyncio

from piknik.config import PiknikConfig
from piknik.keys import derive_key_id

from .piknik_server import PiknikTestServer
from .test_vectors import ENCRYPT_SK, PSK, SIGN_PK, SIGN_SK


@pytest.fixture
def base_config() -> PiknikConfig:
    """Client configuration pointing at a port that is filled in per test."""
    return PiknikConfig(
        host="127.0.0.1",
        port=8075,
        psk=PSK,
        sign_pk=SIGN_PK,
        sign_sk=SIGN_SK,
        encrypt_sk=ENCRYPT_SK,
        encrypt_sk_id=derive_key_id(ENCRYPT_SK),
        timeout_ms=2000,
        data_timeout_ms=5000,
        ttl_secs=3600,
    )


@pytest_asyncio.fixture
async def server():
    """A running test double server sharing the client's PSK."""
    srv = PiknikTestServer(PSK)
    await srv.start()
    yield srv
    await srv.close()


@pytest.fixture
def config(base_config, server) -> PiknikConfig:
    """Client configuration for the running test server."""
    return replace(base_config, port=server.port)
