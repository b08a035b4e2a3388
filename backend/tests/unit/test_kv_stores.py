"""Unit tests for the key-value store backends."""

import json
import typing

import httpx
import pytest

from yardpass.application.interfaces import KeyValueStore
from yardpass.config import Settings
from yardpass.domain.exceptions import StorageError
from yardpass.infrastructure.kv import (
    FallbackKeyValueStore,
    InMemoryKeyValueStore,
    RestKeyValueStore,
    SQLAlchemyKeyValueStore,
    build_key_value_store,
)


class BrokenKeyValueStore(KeyValueStore):
    """A primary store whose backend is always down."""

    name = "broken"

    async def start(self) -> None:
        raise StorageError(self.name, "connection refused")

    async def get(self, key):
        raise StorageError(self.name, "connection refused")

    async def set(self, key, value):
        raise StorageError(self.name, "connection refused")

    async def sadd(self, key, member):
        raise StorageError(self.name, "connection refused")

    async def smembers(self, key):
        raise StorageError(self.name, "connection refused")


class FakeRedisRest:
    """Serves Redis commands posted as JSON arrays, the way Upstash does."""

    def __init__(self, token: str = "secret"):
        self.token = token
        self.values: dict[str, str] = {}
        self.sets: dict[str, set[str]] = {}
        self.commands: list[list[str]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.headers.get("Authorization") != f"Bearer {self.token}":
            return httpx.Response(401, json={"error": "Unauthorized"})
        command = json.loads(request.content)
        self.commands.append(command)
        op, key, *rest = command
        if op == "GET":
            return httpx.Response(200, json={"result": self.values.get(key)})
        if op == "SET":
            self.values[key] = rest[0]
            return httpx.Response(200, json={"result": "OK"})
        if op == "SADD":
            self.sets.setdefault(key, set()).add(rest[0])
            return httpx.Response(200, json={"result": 1})
        if op == "SMEMBERS":
            return httpx.Response(200, json={"result": sorted(self.sets.get(key, ()))})
        return httpx.Response(400, json={"error": f"ERR unknown command '{op}'"})


async def _exercise(store: KeyValueStore) -> None:
    assert await store.get("missing") is None

    await store.set("pass:a", {"id": "YARD-25-000000000001", "n": 1})
    await store.set("pass:a", {"id": "YARD-25-000000000002", "n": 2})
    assert await store.get("pass:a") == {"id": "YARD-25-000000000002", "n": 2}

    await store.sadd("passes:anon_ids", "a")
    await store.sadd("passes:anon_ids", "b")
    await store.sadd("passes:anon_ids", "a")
    assert await store.smembers("passes:anon_ids") == {"a", "b"}
    assert await store.smembers("nothing") == set()


# ── In-memory ────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_memory_store_operations():
    store = InMemoryKeyValueStore()
    await _exercise(store)
    assert store.persistent is False


@pytest.mark.asyncio
async def test_memory_store_returns_copies():
    store = InMemoryKeyValueStore()
    value = {"sections": ["hero"]}
    await store.set("cms", value)
    value["sections"].append("tour")

    loaded = await store.get("cms")
    loaded["sections"].append("press")

    assert await store.get("cms") == {"sections": ["hero"]}


# ── SQL ──────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_sql_store_operations(tmp_path):
    store = SQLAlchemyKeyValueStore(f"sqlite:///{tmp_path}/kv.db")
    await store.start()
    try:
        await _exercise(store)
        assert store.persistent is True
    finally:
        await store.close()


@pytest.mark.asyncio
async def test_sql_store_survives_reopen(tmp_path):
    url = f"sqlite:///{tmp_path}/kv.db"
    first = SQLAlchemyKeyValueStore(url)
    await first.set("yarden:cms:v2", {"version": 2})
    await first.sadd("passes:anon_ids", "device-1")
    await first.close()

    second = SQLAlchemyKeyValueStore(url)
    try:
        assert await second.get("yarden:cms:v2") == {"version": 2}
        assert await second.smembers("passes:anon_ids") == {"device-1"}
    finally:
        await second.close()


# ── REST ─────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_rest_store_operations():
    server = FakeRedisRest()
    store = RestKeyValueStore("https://kv.example.com/", "secret", transport=httpx.MockTransport(server))
    try:
        await _exercise(store)
    finally:
        await store.close()

    assert ["SADD", "passes:anon_ids", "a"] in server.commands
    stored = next(c for c in server.commands if c[0] == "SET")
    assert json.loads(stored[2])["n"] == 1


@pytest.mark.asyncio
async def test_rest_store_maps_error_responses():
    server = FakeRedisRest(token="other")
    store = RestKeyValueStore("https://kv.example.com", "secret", transport=httpx.MockTransport(server))
    try:
        with pytest.raises(StorageError) as exc_info:
            await store.get("pass:a")
    finally:
        await store.close()
    assert exc_info.value.backend == "rest"
    assert "401" in exc_info.value.message


@pytest.mark.asyncio
async def test_rest_store_maps_transport_errors():
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    store = RestKeyValueStore("https://kv.example.com", "secret", transport=httpx.MockTransport(refuse))
    try:
        with pytest.raises(StorageError):
            await store.set("pass:a", {})
    finally:
        await store.close()


@pytest.mark.asyncio
async def test_rest_store_rejects_corrupt_values():
    server = FakeRedisRest()
    server.values["pass:a"] = "{not json"
    store = RestKeyValueStore("https://kv.example.com", "secret", transport=httpx.MockTransport(server))
    try:
        with pytest.raises(StorageError, match="Corrupt value"):
            await store.get("pass:a")
    finally:
        await store.close()


# ── Fallback ─────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_fallback_serves_from_memory_when_primary_fails():
    store = FallbackKeyValueStore(BrokenKeyValueStore())
    await store.start()
    await _exercise(store)
    assert store.name == "broken"


@pytest.mark.asyncio
async def test_fallback_prefers_working_primary():
    primary = InMemoryKeyValueStore()
    fallback = InMemoryKeyValueStore()
    store = FallbackKeyValueStore(primary, fallback)

    await store.set("k", 1)

    assert await primary.get("k") == 1
    assert await fallback.get("k") is None


# ── Factory ──────────────────────────────────────────────────────────


def test_build_store_defaults_to_memory():
    store = build_key_value_store(Settings(_env_file=None, database_url="", kv_rest_api_url=""))
    assert isinstance(store, InMemoryKeyValueStore)


def test_build_store_prefers_rest_when_configured(tmp_path):
    settings = Settings(
        _env_file=None,
        kv_rest_api_url="https://kv.example.com",
        kv_rest_api_token="token",
        database_url=f"sqlite:///{tmp_path}/kv.db",
    )
    store = build_key_value_store(settings)
    assert isinstance(store, FallbackKeyValueStore)
    assert store.name == "rest"


def test_build_store_uses_sql_url(tmp_path):
    settings = Settings(_env_file=None, database_url=f"sqlite:///{tmp_path}/kv.db", kv_rest_api_url="")
    store = build_key_value_store(settings)
    assert isinstance(store, FallbackKeyValueStore)
    assert store.name == "sql"
    assert store.persistent is True


# ── Port signatures ──────────────────────────────────────────────────


@pytest.mark.parametrize(
    "store_class",
    [KeyValueStore, InMemoryKeyValueStore, SQLAlchemyKeyValueStore, RestKeyValueStore, FallbackKeyValueStore],
)
def test_smembers_annotation_resolves_to_builtin_set(store_class):
    hints = typing.get_type_hints(store_class.smembers)
    assert hints["return"] == set[str]
