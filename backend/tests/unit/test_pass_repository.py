"""Unit tests for the key-value backed pass repository."""

from datetime import datetime, timezone

import pytest

from yardpass.domain.entities import FanPass, Gender
from yardpass.infrastructure.kv import InMemoryKeyValueStore
from yardpass.infrastructure.persistence import KeyValuePassRepository
from yardpass.infrastructure.persistence.pass_repository import ALL_ANON_IDS_KEY, pass_key


def _pass(anon_id: str, pass_id: str, created_at: datetime, **overrides) -> FanPass:
    fields = dict(
        id=pass_id,
        anon_id=anon_id,
        name="Ada Obi",
        email="ada@example.com",
        phone="+2348000000000",
        gender=Gender.FEMALE,
        png_data_url="data:image/png;base64,AAAA",
        year_joined=created_at.year,
        created_at=created_at,
    )
    fields.update(overrides)
    return FanPass(**fields)


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def repository(store) -> KeyValuePassRepository:
    return KeyValuePassRepository(store)


@pytest.mark.asyncio
async def test_save_writes_document_and_index(store, repository):
    created = datetime(2025, 10, 19, 12, 30, tzinfo=timezone.utc)
    await repository.save(_pass("device-1", "YARD-25-AAAAAAAAAAAA", created))

    document = await store.get(pass_key("device-1"))
    assert document["anonId"] == "device-1"
    assert document["title"] == "YARDEN'S ANGEL"
    assert document["status"] == "Angel Certified"
    assert document["yearJoined"] == 2025
    assert document["createdAt"].startswith("2025-10-19T12:30:00")
    assert await store.smembers(ALL_ANON_IDS_KEY) == {"device-1"}


@pytest.mark.asyncio
async def test_get_round_trips_entity(repository):
    created = datetime(2025, 10, 19, 12, 30, tzinfo=timezone.utc)
    saved = _pass("device-1", "YARD-25-AAAAAAAAAAAA", created, photo_data_url="data:image/jpeg;base64,BB")
    await repository.save(saved)

    loaded = await repository.get_by_anon_id("device-1")
    assert loaded == saved


@pytest.mark.asyncio
async def test_get_unknown_or_empty_anon_id(repository):
    assert await repository.get_by_anon_id("nobody") is None
    assert await repository.get_by_anon_id("") is None


@pytest.mark.asyncio
async def test_second_save_replaces_first(repository):
    await repository.save(_pass("device-1", "YARD-25-AAAAAAAAAAAA", datetime(2025, 1, 1, tzinfo=timezone.utc)))
    await repository.save(
        _pass("device-1", "YARD-25-BBBBBBBBBBBB", datetime(2025, 2, 1, tzinfo=timezone.utc), name="Second")
    )

    loaded = await repository.get_by_anon_id("device-1")
    assert loaded.id == "YARD-25-BBBBBBBBBBBB"
    assert loaded.name == "Second"
    assert len(await repository.list_all()) == 1


@pytest.mark.asyncio
async def test_list_all_newest_first(repository):
    await repository.save(_pass("a", "YARD-25-AAAAAAAAAAAA", datetime(2025, 1, 1, tzinfo=timezone.utc)))
    await repository.save(_pass("b", "YARD-25-BBBBBBBBBBBB", datetime(2025, 3, 1, tzinfo=timezone.utc)))
    await repository.save(_pass("c", "YARD-25-CCCCCCCCCCCC", datetime(2025, 2, 1, tzinfo=timezone.utc)))

    passes = await repository.list_all()
    assert [p.anon_id for p in passes] == ["b", "c", "a"]


@pytest.mark.asyncio
async def test_list_all_skips_dangling_and_unreadable_entries(store, repository):
    await repository.save(_pass("a", "YARD-25-AAAAAAAAAAAA", datetime(2025, 1, 1, tzinfo=timezone.utc)))
    await store.sadd(ALL_ANON_IDS_KEY, "gone")
    await store.sadd(ALL_ANON_IDS_KEY, "broken")
    await store.set(pass_key("broken"), {"name": "no id"})

    passes = await repository.list_all()
    assert [p.anon_id for p in passes] == ["a"]


@pytest.mark.asyncio
async def test_reads_documents_without_optional_fields(store, repository):
    await store.set(
        pass_key("legacy"),
        {
            "id": "YARD-24-ABCDEFABCDEF",
            "anonId": "legacy",
            "name": "Old Fan",
            "email": "old@example.com",
            "phone": "0800",
            "gender": "male",
            "pngDataUrl": "data:image/png;base64,AAAA",
            "createdAt": "2024-05-01T08:00:00.000Z",
        },
    )

    loaded = await repository.get_by_anon_id("legacy")
    assert loaded.year_joined == 2024
    assert loaded.created_at == datetime(2024, 5, 1, 8, tzinfo=timezone.utc)
    assert loaded.title == "YARDEN'S DESCENDANT"
    assert loaded.ip == "unknown"
