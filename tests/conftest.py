"""Test fixtures and utilities."""

from pathlib import Path

import pytest
from fixtures import CALLBACK_URL, CONSUMER_KEY, CONSUMER_SECRET, RecordingTransport

from zaim_client import ZaimClient


@pytest.fixture
def make_transport():
    """Factory for recording transports with custom responses."""
    return RecordingTransport


@pytest.fixture
def transport() -> RecordingTransport:
    """Recording transport returning the sample verify response."""
    return RecordingTransport()


@pytest.fixture
def client(transport) -> ZaimClient:
    """Pre-authorized client bound to the recording transport."""
    return ZaimClient(
        consumer_key=CONSUMER_KEY,
        consumer_secret=CONSUMER_SECRET,
        access_token="accessToken",
        access_token_secret="accessTokenSecret",
        transport=transport,
    )


@pytest.fixture
def unauthorized_client(transport) -> ZaimClient:
    """Client configured for the handshake, without an access token."""
    return ZaimClient(
        consumer_key=CONSUMER_KEY,
        consumer_secret=CONSUMER_SECRET,
        callback=CALLBACK_URL,
        transport=transport,
    )


@pytest.fixture
def config_file(tmp_path) -> Path:
    """Temporary config file path (not yet written)."""
    return tmp_path / "config.yaml"
