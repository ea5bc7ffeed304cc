"""HMAC-signed session tokens.

A token is ``<base64url(user_id)>.<issued-at epoch seconds>.<hex HMAC-SHA256>``
where the signature covers the first two segments. Tokens older than
``max_age`` seconds are refused. Anyone holding the shared secret can issue
tokens, so the secret must match the one used by the sign-in service.
"""

import base64
import binascii
import hashlib
import hmac
import time
from collections.abc import Callable

from storefront.identity.port import Session, SessionVerifier

DEFAULT_MAX_AGE = 7 * 24 * 60 * 60


class SignedSessionVerifier(SessionVerifier):
    def __init__(
        self,
        secret: str,
        max_age: int = DEFAULT_MAX_AGE,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not secret:
            raise ValueError("A session secret is required")
        self._secret = secret.encode()
        self._max_age = max_age
        self._clock = clock

    def _sign(self, signed_part: str) -> str:
        return hmac.new(self._secret, signed_part.encode(), hashlib.sha256).hexdigest()

    def issue(self, user_id: str) -> str:
        payload = base64.urlsafe_b64encode(user_id.encode()).decode().rstrip("=")
        signed_part = f"{payload}.{int(self._clock())}"
        return f"{signed_part}.{self._sign(signed_part)}"

    def verify(self, token: str) -> Session | None:
        if not token or token.count(".") != 2:
            return None

        payload, issued_at, signature = token.split(".")
        if not hmac.compare_digest(self._sign(f"{payload}.{issued_at}"), signature):
            return None

        if not issued_at.isdigit():
            return None
        age = self._clock() - int(issued_at)
        # Allow a minute of clock skew
        if age > self._max_age or age < -60:
            return None

        try:
            user_id = base64.urlsafe_b64decode(payload + "=" * (-len(payload) % 4)).decode()
        except (binascii.Error, UnicodeDecodeError, ValueError):
            return None

        return Session(user_id=user_id) if user_id else None
