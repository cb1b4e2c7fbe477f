# api/dependencies.py
from typing import Optional
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from shelf.auth import AuthSession
from shelf.hardcover import HardcoverClient
from shelf.sa.database import get_db
from shelf.sa.repositories import UserRepository

_hardcover_client: Optional[HardcoverClient] = None


def get_hardcover() -> HardcoverClient:
    """Shared Hardcover client; its requests.Session pools connections"""
    global _hardcover_client
    if _hardcover_client is None:
        _hardcover_client = HardcoverClient()
    return _hardcover_client


def get_auth_session(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db)
) -> Optional[AuthSession]:
    """Resolve the caller from an ``Authorization: Bearer <token>`` header.

    Returns None for anonymous callers and unknown tokens. Services decide
    whether a missing session is an error (writes) or an empty result (reads).
    """
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    user = UserRepository(db).get_by_token(token.strip())
    if user is None:
        return None
    return AuthSession(user_id=user.id, token=token.strip())
