"""HTTP implementation of the PassGateway port — talks to the pass API with httpx."""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from yardpass.application.interfaces import PassGateway, PassSubmission
from yardpass.application.schemas.fan_pass import PassEnvelope
from yardpass.domain.entities import FanPass
from yardpass.domain.exceptions import PassSaveError, StorageError
from yardpass.domain.identity import ANON_COOKIE_NAME

logger = logging.getLogger(__name__)

PASSES_PATH = "/api/passes"


class HttpPassGateway(PassGateway):
    """Infrastructure adapter — reaches ``/api/passes`` as the device identified by ``anon_id``.

    The anon id travels as the ``yard_anon_id`` cookie, the same way a
    browser would send it.
    """

    name = "pass-api"

    def __init__(
        self,
        base_url: str = "",
        *,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._http_client = http_client or httpx.AsyncClient(base_url=base_url.rstrip("/"), timeout=timeout)

    async def close(self) -> None:
        await self._http_client.aclose()

    @staticmethod
    def _headers(anon_id: str) -> dict[str, str]:
        return {"Cookie": f"{ANON_COOKIE_NAME}={anon_id}", "Accept": "application/json"}

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body: Any = response.json()
        except ValueError:
            return response.text[:200]
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return response.reason_phrase

    async def fetch(self, anon_id: str) -> FanPass | None:
        try:
            response = await self._http_client.get(
                PASSES_PATH, params={"anonId": anon_id}, headers=self._headers(anon_id)
            )
        except httpx.HTTPError as exc:
            raise StorageError(self.name, f"GET {PASSES_PATH} failed: {exc}") from exc

        if response.status_code != 200:
            raise StorageError(
                self.name, f"GET {PASSES_PATH} returned {response.status_code}: {self._error_message(response)}"
            )
        try:
            envelope = PassEnvelope.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise StorageError(self.name, f"Unreadable pass payload: {exc}") from exc

        return envelope.fan_pass.to_entity() if envelope.fan_pass else None

    async def save(self, anon_id: str, submission: PassSubmission) -> FanPass:
        payload = {
            "name": submission.name,
            "email": submission.email,
            "phone": submission.phone,
            "gender": submission.gender.value,
            "pngDataUrl": submission.png_data_url,
            "photoDataUrl": submission.photo_data_url,
        }
        if submission.pass_id:
            payload["id"] = submission.pass_id

        try:
            response = await self._http_client.post(PASSES_PATH, json=payload, headers=self._headers(anon_id))
        except httpx.HTTPError as exc:
            logger.warning("POST %s failed: %s", PASSES_PATH, exc)
            raise PassSaveError(f"Failed to save pass: {exc}") from exc

        if response.status_code not in (200, 201):
            message = self._error_message(response)
            logger.warning("POST %s returned %s: %s", PASSES_PATH, response.status_code, message)
            raise PassSaveError(message)

        try:
            envelope = PassEnvelope.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise PassSaveError(f"Unreadable pass payload: {exc}") from exc
        if envelope.fan_pass is None:
            raise PassSaveError("Server did not return the saved pass")
        return envelope.fan_pass.to_entity()
