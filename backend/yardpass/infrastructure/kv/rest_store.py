"""Key-value store backed by a Redis REST endpoint (Upstash / Vercel KV compatible).

Every call POSTs a Redis command as a JSON array to the base URL, e.g.
``["SET", "pass:<anon>", "<json>"]``, and reads ``{"result": ...}`` back.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from yardpass.application.interfaces import KeyValueStore
from yardpass.domain.exceptions import StorageError

logger = logging.getLogger(__name__)


class RestKeyValueStore(KeyValueStore):
    """Implements the KeyValueStore port over HTTP with httpx."""

    name = "rest"

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={"Authorization": f"Bearer {token}"},
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def _command(self, *args: str) -> Any:
        try:
            response = await self._client.post("", json=list(args))
        except httpx.HTTPError as exc:
            raise StorageError(self.name, f"{args[0]} failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if response.status_code >= 400 or "error" in payload:
            message = payload.get("error") or response.text[:200]
            raise StorageError(self.name, f"{args[0]} returned {response.status_code}: {message}")

        logger.debug("KV %s %s → %s", args[0], args[1] if len(args) > 1 else "", response.status_code)
        return payload.get("result")

    async def get(self, key: str) -> Any | None:
        raw = await self._command("GET", key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError) as exc:
            raise StorageError(self.name, f"Corrupt value under '{key}': {exc}") from exc

    async def set(self, key: str, value: Any) -> None:
        await self._command("SET", key, json.dumps(value))

    async def sadd(self, key: str, member: str) -> None:
        await self._command("SADD", key, member)

    async def smembers(self, key: str) -> set[str]:
        members = await self._command("SMEMBERS", key)
        return {str(m) for m in members or []}
