"""Abstract interface (port) for the key-value store behind passes and the CMS."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class KeyValueStore(ABC):
    """Port for JSON key-value persistence — implemented in the infrastructure layer.

    Values are JSON-serialisable objects. Sets hold string members and back
    secondary indexes (e.g. the list of anon ids that own a pass).
    Backends raise ``StorageError`` when they cannot serve a call.
    """

    name: str = "kv"

    @property
    def persistent(self) -> bool:
        """Whether data survives a process restart."""
        return True

    async def start(self) -> None:
        """Acquire resources (connections, tables). Safe to call more than once."""

    async def close(self) -> None:
        """Release resources acquired by ``start``."""

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Return the value stored under ``key`` or None."""
        ...

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    @abstractmethod
    async def sadd(self, key: str, member: str) -> None:
        """Add ``member`` to the set stored under ``key``."""
        ...

    @abstractmethod
    async def smembers(self, key: str) -> set[str]:
        """Return every member of the set stored under ``key``."""
        ...
