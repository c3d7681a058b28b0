"""Shared pytest fixtures for GamerStation API tests."""

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from aiohttp.test_utils import TestClient, TestServer

from gamerstation.adapters.database.manager import DatabaseManager
from gamerstation.adapters.http import create_app
from gamerstation.application.summoner_index import SummonerIndexService
from gamerstation.config import Config


@pytest.fixture
def test_config(tmp_path, monkeypatch):
    """Create test configuration backed by a throwaway SQLite file."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'index.db'}")
    monkeypatch.setenv("ENVIRONMENT", "CI")
    monkeypatch.setenv("BNET_CLIENT_ID", "test-client-id")
    monkeypatch.setenv("BNET_CLIENT_SECRET", "test-client-secret")
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.delenv("OTEL_ENABLED", raising=False)

    return Config.from_env()


@pytest_asyncio.fixture
async def db_manager(test_config):
    """Initialized database manager with a fresh schema."""
    manager = DatabaseManager(test_config)
    await manager.initialize()
    await manager.create_tables()

    yield manager

    await manager.drop_tables()
    await manager.close()


@pytest_asyncio.fixture
async def summoner_index(db_manager):
    return SummonerIndexService(db_manager)


@pytest.fixture
def mock_summoner_index():
    index = AsyncMock()
    index.suggest_summoners.return_value = []
    return index


@pytest.fixture
def mock_wow_fetcher():
    return AsyncMock()


@pytest_asyncio.fixture
async def api_client(mock_summoner_index, mock_wow_fetcher):
    """HTTP client for an app whose collaborators are mocks."""
    app = create_app(mock_summoner_index, mock_wow_fetcher)
    async with TestClient(TestServer(app)) as client:
        yield client
