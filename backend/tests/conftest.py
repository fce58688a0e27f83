# tests/conftest.py
import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from medicall.client.api import SyncApiClient
from medicall.client.cache import ClientCache
from medicall.config.settings import ClientSettings, Settings
from medicall.main import create_app, shutdown, startup


@pytest.fixture
def test_settings(tmp_path):
    """Server settings pointing at a throwaway SQLite file."""
    return Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'test_crm.db'}")


@pytest.fixture
def client_settings(tmp_path):
    return ClientSettings(
        api_url="http://testserver/api",
        socket_url="ws://testserver/ws",
        cache_dir=str(tmp_path / "client_cache"),
        reconnection_attempts=2,
        reconnection_delay=0,
        timeout=1,
    )


@pytest_asyncio.fixture
async def app(test_settings):
    """App with database and broadcaster initialised, no server process."""
    application = create_app(test_settings)
    await startup(application)
    yield application
    await shutdown(application)


@pytest_asyncio.fixture
async def api_client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture
def ws_client(test_settings):
    """Sync TestClient running the real lifespan, for WebSocket flows."""
    with TestClient(create_app(test_settings)) as client:
        yield client


@pytest.fixture
def cache(client_settings):
    return ClientCache(client_settings.cache_dir)


@pytest.fixture
def asgi_sync_api(app):
    """Client-side REST wrapper talking to the in-process app."""
    return SyncApiClient("http://testserver/api", transport=httpx.ASGITransport(app=app))
