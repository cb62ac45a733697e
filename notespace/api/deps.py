"""Shared FastAPI dependencies for API routes."""

from __future__ import annotations

from fastapi import Cookie, Depends, Header, HTTPException, status

from notespace.db.session import get_db  # re-export
from notespace.services.identity import Identity, decode_identity_token

__all__ = [
    "get_db",
    "get_current_identity",
    "require_auth",
]

# Cookie name for browser sessions
AUTH_COOKIE = "access_token"


def get_current_identity(
    authorization: str | None = Header(None),
    access_token: str | None = Cookie(None),
) -> Identity | None:
    """Return the caller's identity or None.

    Checks (in order):
    1. Authorization: Bearer <token> header
    2. access_token cookie
    """
    token: str | None = None

    # Check Authorization header
    if authorization and authorization.startswith("Bearer "):
        token = authorization[len("Bearer ") :]

    # Fall back to cookie
    if token is None and access_token:
        token = access_token

    if token is None:
        return None

    return decode_identity_token(token)


def require_auth(identity: Identity | None = Depends(get_current_identity)) -> Identity:
    """Dependency that requires a valid identity token; 401 otherwise."""
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return identity
