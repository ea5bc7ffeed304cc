"""Session verifier factory.

get_session_verifier() builds a SignedSessionVerifier from SESSION_SECRET on
first use; set_session_verifier() swaps it out.
"""

import os

from storefront.identity.port import Session, SessionVerifier
from storefront.identity.signed_adapter import SignedSessionVerifier

DEVELOPMENT_SECRET = "storefront-development-secret"

_current_verifier: SessionVerifier | None = None


def get_session_verifier() -> SessionVerifier:
    global _current_verifier
    if _current_verifier is None:
        secret = os.environ.get("SESSION_SECRET")
        if not secret:
            if os.environ.get("PROTEAN_ENV") == "production":
                raise RuntimeError("SESSION_SECRET must be set in production")
            secret = DEVELOPMENT_SECRET
        _current_verifier = SignedSessionVerifier(secret)
    return _current_verifier


def set_session_verifier(verifier: SessionVerifier) -> None:
    global _current_verifier
    _current_verifier = verifier


def reset_session_verifier() -> None:
    global _current_verifier
    _current_verifier = None


__all__ = ["Session", "SessionVerifier", "get_session_verifier", "set_session_verifier", "reset_session_verifier"]
