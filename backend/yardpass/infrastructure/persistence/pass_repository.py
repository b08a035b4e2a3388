"""Concrete repository implementation for FanPass backed by the key-value store.

Layout:
    pass:<anonId>      → FanPass JSON document
    passes:anon_ids    → set of every anonId that owns a pass (admin listing index)
"""

import logging
from datetime import datetime, timezone
from typing import Any

from yardpass.application.interfaces import KeyValueStore, PassRepository
from yardpass.domain.entities import FanPass, Gender

logger = logging.getLogger(__name__)

PASS_KEY_PREFIX = "pass:"
ALL_ANON_IDS_KEY = "passes:anon_ids"


def pass_key(anon_id: str) -> str:
    return f"{PASS_KEY_PREFIX}{anon_id}"


def _parse_timestamp(raw: Any) -> datetime:
    if isinstance(raw, str) and raw:
        try:
            parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError:
            parsed = None
        if parsed is not None:
            return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return datetime.fromtimestamp(0, tz=timezone.utc)


class KeyValuePassRepository(PassRepository):
    """Implements the PassRepository port on any KeyValueStore."""

    def __init__(self, store: KeyValueStore):
        self._store = store

    @staticmethod
    def _to_document(entity: FanPass) -> dict[str, Any]:
        """Map domain entity → stored JSON document (camelCase wire names)."""
        return {
            "id": entity.id,
            "anonId": entity.anon_id,
            "name": entity.name,
            "email": entity.email,
            "phone": entity.phone,
            "gender": entity.gender.value,
            "title": entity.title,
            "status": entity.status,
            "yearJoined": entity.year_joined,
            "createdAt": entity.created_at.isoformat(),
            "pngDataUrl": entity.png_data_url,
            "photoDataUrl": entity.photo_data_url,
            "ip": entity.ip,
            "userAgent": entity.user_agent,
        }

    @staticmethod
    def _to_entity(document: dict[str, Any]) -> FanPass:
        """Map stored JSON document → domain entity."""
        created_at = _parse_timestamp(document.get("createdAt"))
        return FanPass(
            id=document["id"],
            anon_id=document["anonId"],
            name=document.get("name", ""),
            email=document.get("email", ""),
            phone=document.get("phone", ""),
            gender=Gender(document.get("gender", Gender.MALE.value)),
            png_data_url=document.get("pngDataUrl", ""),
            year_joined=int(document.get("yearJoined") or created_at.year),
            created_at=created_at,
            photo_data_url=document.get("photoDataUrl"),
            ip=document.get("ip", "unknown"),
            user_agent=document.get("userAgent", "unknown"),
        )

    async def get_by_anon_id(self, anon_id: str) -> FanPass | None:
        if not anon_id:
            return None
        document = await self._store.get(pass_key(anon_id))
        return self._to_entity(document) if document else None

    async def save(self, fan_pass: FanPass) -> FanPass:
        await self._store.set(pass_key(fan_pass.anon_id), self._to_document(fan_pass))
        await self._store.sadd(ALL_ANON_IDS_KEY, fan_pass.anon_id)
        logger.info("Pass saved: %s for %s", fan_pass.id, fan_pass.anon_id)
        return fan_pass

    async def list_all(self) -> list[FanPass]:
        passes: list[FanPass] = []
        for anon_id in await self._store.smembers(ALL_ANON_IDS_KEY):
            document = await self._store.get(pass_key(anon_id))
            if not document:
                continue
            try:
                passes.append(self._to_entity(document))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping unreadable pass for %s: %s", anon_id, exc)
        passes.sort(key=lambda p: p.created_at, reverse=True)
        return passes
