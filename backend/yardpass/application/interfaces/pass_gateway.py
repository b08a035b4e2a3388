"""Abstract interface (port) the pass flow uses to reach the pass API."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from yardpass.domain.entities import FanPass, Gender


@dataclass
class PassSubmission:
    """Form fields plus the exported card image sent on submit."""

    name: str
    email: str
    phone: str
    gender: Gender
    png_data_url: str
    photo_data_url: str | None = None
    pass_id: str | None = None


class PassGateway(ABC):
    """Port for pass persistence as seen from the signup flow."""

    @abstractmethod
    async def fetch(self, anon_id: str) -> FanPass | None:
        """Return the pass stored for ``anon_id``, or None."""
        ...

    @abstractmethod
    async def save(self, anon_id: str, submission: PassSubmission) -> FanPass:
        """Store a new pass for ``anon_id`` and return it as stored.

        Raises ``PassSaveError`` if the pass could not be stored.
        """
        ...
