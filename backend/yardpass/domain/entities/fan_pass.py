"""Domain entity — the fan pass issued to one anonymous device."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class Gender(str, Enum):
    """Closed two-valued category chosen on the signup form."""

    MALE = "male"
    FEMALE = "female"

    @property
    def house(self) -> str:
        return "ANGEL" if self is Gender.FEMALE else "DESCENDANT"

    @property
    def title(self) -> str:
        return f"YARDEN'S {self.house}"

    @property
    def status(self) -> str:
        return "Angel Certified" if self is Gender.FEMALE else "Descendant Certified"

    @property
    def closing_line(self) -> str:
        keepsake = "wings" if self is Gender.FEMALE else "legacy"
        return f"Losing this card won't revoke your {keepsake} but it"


@dataclass
class FanPass:
    """Core domain entity for a generated Yard Pass.

    The exported PNG is captured once at creation and stored verbatim;
    it is never re-rendered from the other fields.
    """

    id: str
    anon_id: str
    name: str
    email: str
    phone: str
    gender: Gender
    png_data_url: str
    year_joined: int = field(default_factory=lambda: datetime.now(timezone.utc).year)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    photo_data_url: str | None = None
    ip: str = "unknown"
    user_agent: str = "unknown"

    @property
    def title(self) -> str:
        return self.gender.title

    @property
    def status(self) -> str:
        return self.gender.status
