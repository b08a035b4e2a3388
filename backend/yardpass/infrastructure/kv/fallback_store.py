"""Store wrapper that degrades to an in-memory store when the primary backend fails."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from yardpass.application.interfaces import KeyValueStore
from yardpass.domain.exceptions import StorageError
from yardpass.infrastructure.kv.memory_store import InMemoryKeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FallbackKeyValueStore(KeyValueStore):
    """Serves every call from ``primary``; on ``StorageError`` serves it from ``fallback``."""

    def __init__(self, primary: KeyValueStore, fallback: KeyValueStore | None = None):
        self._primary = primary
        self._fallback = fallback or InMemoryKeyValueStore()
        self.name = primary.name

    @property
    def persistent(self) -> bool:
        return self._primary.persistent

    async def start(self) -> None:
        try:
            await self._primary.start()
        except StorageError as exc:
            logger.warning("Primary store unavailable at startup, using in-memory fallback: %s", exc)

    async def close(self) -> None:
        await self._primary.close()
        await self._fallback.close()

    async def _call(
        self,
        op: str,
        primary: Callable[[], Awaitable[T]],
        fallback: Callable[[], Awaitable[T]],
    ) -> T:
        try:
            return await primary()
        except StorageError as exc:
            logger.warning("KV %s failed on %s, serving from memory: %s", op, self._primary.name, exc)
            return await fallback()

    async def get(self, key: str) -> Any | None:
        return await self._call(
            "get", lambda: self._primary.get(key), lambda: self._fallback.get(key)
        )

    async def set(self, key: str, value: Any) -> None:
        await self._call(
            "set", lambda: self._primary.set(key, value), lambda: self._fallback.set(key, value)
        )

    async def sadd(self, key: str, member: str) -> None:
        await self._call(
            "sadd",
            lambda: self._primary.sadd(key, member),
            lambda: self._fallback.sadd(key, member),
        )

    async def smembers(self, key: str) -> set[str]:
        return await self._call(
            "smembers", lambda: self._primary.smembers(key), lambda: self._fallback.smembers(key)
        )
