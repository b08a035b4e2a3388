"""In-process key-value store — the default backend and the fallback for persistent ones."""

from __future__ import annotations

import json
from typing import Any

from yardpass.application.interfaces import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store. Values are copied through JSON so callers never share state."""

    name = "memory"

    def __init__(self) -> None:
        self._values: dict[str, str] = {}
        self._sets: dict[str, set[str]] = {}

    @property
    def persistent(self) -> bool:
        return False

    async def get(self, key: str) -> Any | None:
        raw = self._values.get(key)
        return json.loads(raw) if raw is not None else None

    async def set(self, key: str, value: Any) -> None:
        self._values[key] = json.dumps(value)

    async def sadd(self, key: str, member: str) -> None:
        self._sets.setdefault(key, set()).add(member)

    async def smembers(self, key: str) -> set[str]:
        return set(self._sets.get(key, ()))
