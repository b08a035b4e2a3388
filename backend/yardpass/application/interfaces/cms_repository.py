"""Abstract repository interface (port) for the singleton CMS document."""

from abc import ABC, abstractmethod
from typing import Any


class CmsRepository(ABC):
    """Port for CMS persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get(self) -> dict[str, Any] | None:
        """Return the live CMS document, or None if none was ever stored."""
        ...

    @abstractmethod
    async def save(self, document: dict[str, Any]) -> dict[str, Any]:
        """Replace the live CMS document wholesale."""
        ...
