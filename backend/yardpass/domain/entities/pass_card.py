"""Render input for the card layout — a FanPass-shaped, display-ready value."""

from dataclasses import dataclass
from datetime import datetime, timezone

from yardpass.domain.entities.fan_pass import FanPass, Gender

PLACEHOLDER_ID = "YARD-XX-XXXXXXXX"
PLACEHOLDER_NAME = "Your Name"
PLACEHOLDER_EMAIL = "you@email.com"
PLACEHOLDER_PHONE = "+234..."

DATE_LABEL_FORMAT = "%d %b %Y"


def format_created_label(moment: datetime) -> str:
    """Format a creation timestamp the way the card prints it, e.g. ``19 Oct 2026``."""
    return moment.strftime(DATE_LABEL_FORMAT)


@dataclass(frozen=True)
class PassCard:
    """Everything the renderer needs to paint one card."""

    id: str
    name: str
    email: str
    phone: str
    gender: Gender
    year_joined: int
    created_label: str
    photo: bytes | str | None = None

    @classmethod
    def from_pass(cls, fan_pass: FanPass, photo: bytes | str | None = None) -> "PassCard":
        return cls(
            id=fan_pass.id,
            name=fan_pass.name,
            email=fan_pass.email,
            phone=fan_pass.phone,
            gender=fan_pass.gender,
            year_joined=fan_pass.year_joined,
            created_label=format_created_label(fan_pass.created_at),
            photo=photo if photo is not None else fan_pass.photo_data_url,
        )

    @classmethod
    def preview(
        cls,
        *,
        name: str = "",
        email: str = "",
        phone: str = "",
        gender: Gender | None = None,
        photo: bytes | str | None = None,
        now: datetime | None = None,
    ) -> "PassCard":
        """Build a preview card, substituting placeholders for empty fields."""
        moment = now or datetime.now(timezone.utc)
        return cls(
            id=PLACEHOLDER_ID,
            name=name.strip() or PLACEHOLDER_NAME,
            email=email.strip() or PLACEHOLDER_EMAIL,
            phone=phone.strip() or PLACEHOLDER_PHONE,
            gender=gender or Gender.MALE,
            year_joined=moment.year,
            created_label=format_created_label(moment),
            photo=photo,
        )
