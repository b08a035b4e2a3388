"""Identifier generation for passes and anonymous devices."""

import random
import re
import secrets
import uuid
from datetime import datetime, timezone

ANON_COOKIE_NAME = "yard_anon_id"
FAN_ID_PREFIX = "YARD"
FAN_ID_PATTERN = re.compile(r"^YARD-\d{2}-[0-9A-F]{12}$")
_FAN_ID_RANDOM_BYTES = 6


def _random_bytes(count: int) -> bytes:
    try:
        return secrets.token_bytes(count)
    except (NotImplementedError, OSError):
        # No OS entropy source; ids only need to be unique, not secret.
        return random.getrandbits(count * 8).to_bytes(count, "big")


def generate_fan_id(now: datetime | None = None) -> str:
    """Return a fresh pass id, e.g. ``YARD-25-9F2A1C0B77AA``."""
    year = (now or datetime.now(timezone.utc)).strftime("%y")
    suffix = _random_bytes(_FAN_ID_RANDOM_BYTES).hex().upper()
    return f"{FAN_ID_PREFIX}-{year}-{suffix}"


def generate_anon_id() -> str:
    """Return a new anonymous device id (UUID4)."""
    return str(uuid.uuid4())
