"""Contact masking for the printed card."""

import re

EMAIL_MASK = "***"
PHONE_MASK_CHAR = "*"

_WHITESPACE = re.compile(r"\s+")


def mask_email(email: str) -> str:
    """``ab@example.com`` → ``ab***b@example.com``."""
    local, at, domain = email.strip().partition("@")
    masked = f"{local[:2]}{EMAIL_MASK}{local[-1:]}"
    return f"{masked}{at}{domain}"


def mask_phone(phone: str) -> str:
    """``+234 800 000 0000`` → ``+234*******000``."""
    compact = _WHITESPACE.sub("", phone)
    if len(compact) <= 7:
        return compact
    hidden = len(compact) - 7
    return f"{compact[:4]}{PHONE_MASK_CHAR * hidden}{compact[-3:]}"
