"""Session verifier port.

Resolves a bearer token to the authenticated user, or to nobody. The session
provider itself (sign-in, sign-up, token refresh) lives outside this service.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Session:
    user_id: str


class SessionVerifier(ABC):
    @abstractmethod
    def verify(self, token: str) -> Session | None:
        """Return the session a token belongs to, or None if it is not valid."""
        ...
