# shelf/auth.py
from dataclasses import dataclass
from typing import Optional

from shelf.exceptions import AuthenticationError


@dataclass(frozen=True)
class AuthSession:
    """Identity of the caller, passed explicitly into every data-access call."""
    user_id: int
    token: Optional[str] = None


def require_auth(auth: Optional[AuthSession]) -> AuthSession:
    """Return the session or raise for write paths that need a signed-in user."""
    if auth is None or auth.user_id is None:
        raise AuthenticationError()
    return auth
