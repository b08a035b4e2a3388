"""Shared fixtures: an app wired to an in-memory store and a temp upload dir."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from yardpass.config import Settings
from yardpass.infrastructure.kv import InMemoryKeyValueStore
from yardpass.main import create_app

ADMIN_PASSWORD = "letmein"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        admin_password=ADMIN_PASSWORD,
        admin_session_secret="test-secret",
        database_url="",
        kv_rest_api_url="",
        kv_rest_api_token="",
        upload_dir=str(tmp_path),
        max_upload_size_mb=1,
    )


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def app(settings, store):
    return create_app(settings=settings, store=store)


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest_asyncio.fixture
async def admin_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        response = await c.post("/api/admin/login", json={"password": ADMIN_PASSWORD})
        assert response.status_code == 200
        yield c
