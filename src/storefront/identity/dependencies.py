"""FastAPI dependencies that resolve the caller's identity."""

from fastapi import Depends, Header

from storefront.errors import Unauthorized
from storefront.identity import get_session_verifier


def current_user_id(authorization: str = Header(default="")) -> str | None:
    """Return the authenticated user id, or None for anonymous callers."""
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None

    session = get_session_verifier().verify(token.strip())
    return session.user_id if session else None


def require_user_id(user_id: str | None = Depends(current_user_id)) -> str:
    if user_id is None:
        raise Unauthorized("You need to sign in to continue")
    return user_id
