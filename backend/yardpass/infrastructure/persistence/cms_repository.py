"""Concrete repository implementation for the CMS document backed by the key-value store."""

from typing import Any

from yardpass.application.interfaces import CmsRepository, KeyValueStore

CMS_KEY = "yarden:cms:v2"


class KeyValueCmsRepository(CmsRepository):
    """Implements the CmsRepository port as a single key in a KeyValueStore."""

    def __init__(self, store: KeyValueStore, key: str = CMS_KEY):
        self._store = store
        self._key = key

    async def get(self) -> dict[str, Any] | None:
        document = await self._store.get(self._key)
        return document if isinstance(document, dict) else None

    async def save(self, document: dict[str, Any]) -> dict[str, Any]:
        await self._store.set(self._key, document)
        return document
