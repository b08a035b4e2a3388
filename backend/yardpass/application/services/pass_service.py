"""Application service (use case) for fan pass operations."""

import logging
from datetime import datetime, timezone

from yardpass.application.interfaces import PassRepository
from yardpass.application.schemas.fan_pass import PassCreate
from yardpass.domain.entities import FanPass, Gender
from yardpass.domain.exceptions import EntityNotFoundError, PassValidationError
from yardpass.domain.identity import FAN_ID_PATTERN, generate_fan_id

logger = logging.getLogger(__name__)


def validate_pass_fields(name: str, email: str, phone: str, gender: Gender | str | None) -> Gender:
    """Check the signup fields and return the parsed category.

    Raises PassValidationError with a message fit to show next to the form.
    """
    if not (name or "").strip():
        raise PassValidationError("Name is required")
    if "@" not in (email or ""):
        raise PassValidationError("A valid email address is required")
    if not (phone or "").strip():
        raise PassValidationError("Phone number is required")
    if not gender:
        raise PassValidationError("Choose a category: male or female")
    try:
        return Gender(gender)
    except ValueError:
        raise PassValidationError("Category must be 'male' or 'female'") from None


class PassService:
    """Orchestrates pass creation and lookup. Depends on the repository port (DI)."""

    def __init__(self, repository: PassRepository):
        self._repository = repository

    async def get_pass(self, anon_id: str | None) -> FanPass | None:
        if not anon_id:
            return None
        return await self._repository.get_by_anon_id(anon_id)

    async def require_pass(self, anon_id: str | None) -> FanPass:
        fan_pass = await self.get_pass(anon_id)
        if fan_pass is None:
            raise EntityNotFoundError("FanPass", anon_id or "")
        return fan_pass

    async def list_passes(self) -> list[FanPass]:
        return await self._repository.list_all()

    async def create_pass(
        self,
        data: PassCreate,
        *,
        anon_id: str,
        ip: str = "unknown",
        user_agent: str = "unknown",
        now: datetime | None = None,
    ) -> FanPass:
        """Validate the submission and store it as the device's only pass."""
        gender = validate_pass_fields(data.name, data.email, data.phone, data.gender)
        if not data.png_data_url:
            raise PassValidationError("Card image is required")

        moment = now or datetime.now(timezone.utc)
        # Keep the client's id when it is well-formed so the stored record
        # matches the id printed on the exported image.
        pass_id = data.id if data.id and FAN_ID_PATTERN.match(data.id) else generate_fan_id(moment)

        fan_pass = FanPass(
            id=pass_id,
            anon_id=anon_id,
            name=data.name.strip(),
            email=data.email.strip(),
            phone=data.phone.strip(),
            gender=gender,
            png_data_url=data.png_data_url,
            year_joined=moment.year,
            created_at=moment,
            photo_data_url=data.photo_data_url or None,
            ip=ip or "unknown",
            user_agent=user_agent or "unknown",
        )
        return await self._repository.save(fan_pass)
