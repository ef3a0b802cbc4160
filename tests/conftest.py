"""Shared pytest fixtures for Stylecraft tests."""

from __future__ import annotations

from typing import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from stylecraft.api.main import create_app
from stylecraft.core.config import StylecraftConfig
from stylecraft.core.provider import ImageProvider, ProviderImage
from stylecraft.core.store import MemoryStore

TEST_IMAGE_URL = "https://fal.media/files/test/generated.png"


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's real credential and overrides out of tests."""
    for name in ("FAL_KEY", "STYLECRAFT_FAL_KEY", "STYLECRAFT_SERVER_PORT", "STYLECRAFT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def test_config() -> StylecraftConfig:
    """Create a test configuration with a dummy credential.

    Returns:
        StylecraftConfig instance for testing
    """
    return StylecraftConfig(fal_key="test-fal-key", _env_file=None)


@pytest.fixture
def store() -> MemoryStore:
    """Create an empty in-memory record store."""
    return MemoryStore()


@pytest.fixture
def mock_provider() -> MagicMock:
    """Create a provider double that returns a 1024x1024 image URL.

    Tests can replace ``mock_provider.generate.side_effect`` or
    ``return_value`` to simulate failures or other responses.
    """
    provider = MagicMock(spec=ImageProvider)
    provider.generate = AsyncMock(
        return_value=ProviderImage(url=TEST_IMAGE_URL, width=1024, height=1024)
    )
    provider.close = AsyncMock()
    return provider


@pytest.fixture
def test_client(
    test_config: StylecraftConfig, store: MemoryStore, mock_provider: MagicMock
) -> Generator[TestClient, None, None]:
    """Create a TestClient with the lifespan running.

    Yields:
        TestClient bound to an app using ``store`` and ``mock_provider``
    """
    app = create_app(test_config, store=store, provider=mock_provider)
    with TestClient(app) as client:
        yield client
