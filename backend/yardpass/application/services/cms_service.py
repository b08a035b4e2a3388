"""Application service for the site's CMS document."""

import logging
import time
from collections.abc import Callable
from typing import Any

from yardpass.application.interfaces import CmsRepository
from yardpass.application.schemas.cms import CmsDocument
from yardpass.content import default_cms

logger = logging.getLogger(__name__)

CMS_VERSION = 2
CMS_SECTIONS = ("releases", "visuals", "tour", "store", "newsletter")


def _now_ms() -> int:
    return int(time.time() * 1000)


class CmsService:
    """Reads, replaces and resets the single live CMS document.

    Reads seed the bundled defaults on first access. Every write stamps
    ``version`` and an ``updatedAt`` strictly greater than the stored one.
    """

    def __init__(self, repository: CmsRepository, clock: Callable[[], int] = _now_ms):
        self._repository = repository
        self._clock = clock

    async def get_cms(self) -> dict[str, Any]:
        document = await self._repository.get()
        if document is None:
            logger.info("No CMS document stored yet, seeding defaults")
            return await self._store(default_cms(), previous=None)
        return self._fill_sections(document)

    async def update_cms(self, incoming: dict[str, Any]) -> dict[str, Any]:
        """Replace the live document wholesale.

        Raises ``pydantic.ValidationError`` when an item is malformed.
        """
        previous = await self._repository.get()
        normalized = self._normalize(self._fill_sections(incoming))
        return await self._store(normalized, previous=previous)

    async def reset_cms(self) -> dict[str, Any]:
        previous = await self._repository.get()
        logger.info("Resetting CMS document to defaults")
        return await self._store(default_cms(), previous=previous)

    # ── helpers ──────────────────────────────────────────────────────

    @staticmethod
    def _fill_sections(document: dict[str, Any]) -> dict[str, Any]:
        """Fill any missing top-level section from the defaults."""
        filled = dict(document)
        defaults = default_cms()
        for section in CMS_SECTIONS:
            if filled.get(section) is None:
                filled[section] = defaults[section]
        return filled

    @staticmethod
    def _normalize(document: dict[str, Any]) -> dict[str, Any]:
        return CmsDocument.model_validate(document).model_dump(by_alias=True, exclude_none=True)

    async def _store(self, document: dict[str, Any], *, previous: dict[str, Any] | None) -> dict[str, Any]:
        last = 0
        if previous is not None:
            try:
                last = int(previous.get("updatedAt") or 0)
            except (TypeError, ValueError):
                last = 0
        document["version"] = CMS_VERSION
        document["updatedAt"] = max(self._clock(), last + 1)
        return await self._repository.save(document)
