"""Admin password check and signed session tokens."""

import hashlib
import hmac
import secrets
import time
from collections.abc import Callable

from yardpass.domain.exceptions import AuthenticationError

ADMIN_COOKIE_NAME = "yard_admin_session"


class AdminAuthService:
    """Verifies the shared admin password and issues stateless session tokens.

    A token is ``<expiry>.<nonce>.<signature>`` where the signature is an
    HMAC-SHA256 of ``<expiry>.<nonce>`` under the session secret. Nothing is
    stored server-side; a token is valid until its expiry passes.
    """

    def __init__(
        self,
        password: str,
        secret: str,
        max_age: int = 12 * 60 * 60,
        clock: Callable[[], float] = time.time,
    ):
        self._password = password
        self._secret = secret.encode("utf-8")
        self.max_age = max_age
        self._clock = clock

    @property
    def configured(self) -> bool:
        return bool(self._password)

    def verify_password(self, password: str | None) -> None:
        if not password or not hmac.compare_digest(
            password.encode("utf-8"), self._password.encode("utf-8")
        ):
            raise AuthenticationError("Invalid password")

    def _sign(self, payload: str) -> str:
        return hmac.new(self._secret, payload.encode("utf-8"), hashlib.sha256).hexdigest()

    def issue_token(self) -> str:
        expiry = int(self._clock()) + self.max_age
        payload = f"{expiry}.{secrets.token_hex(16)}"
        return f"{payload}.{self._sign(payload)}"

    def is_valid_token(self, token: str | None) -> bool:
        if not token or not self._secret:
            return False
        expiry, _, rest = token.partition(".")
        nonce, _, signature = rest.partition(".")
        if not (expiry.isdigit() and nonce and signature):
            return False
        if not hmac.compare_digest(signature, self._sign(f"{expiry}.{nonce}")):
            return False
        return int(expiry) > self._clock()
