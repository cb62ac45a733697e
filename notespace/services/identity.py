"""Identity reference: bearer tokens from the identity provider and profiles.

The provider authenticates users; this module only verifies the HS256
signature of its tokens and mirrors profiles into the ``users`` table.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Optional

from jose import JWTError, jwt
from sqlalchemy.orm import Session

from notespace.config import get_settings
from notespace.models.user import User

logger = logging.getLogger(__name__)

# JWT configuration
ALGORITHM = "HS256"
IDENTITY_TOKEN_EXPIRE_HOURS = 24


@dataclass(frozen=True)
class Identity:
    """Authenticated caller as asserted by the identity provider."""

    user_id: str
    email: str | None = None
    name: str | None = None


def create_identity_token(
    user_id: str,
    email: str | None = None,
    name: str | None = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create a signed identity token (development tooling and tests)."""
    settings = get_settings()
    to_encode: dict = {"sub": user_id}
    if email is not None:
        to_encode["email"] = email
    if name is not None:
        to_encode["name"] = name
    if settings.identity_token_audience:
        to_encode["aud"] = settings.identity_token_audience
    expire = datetime.now(UTC) + (expires_delta or timedelta(hours=IDENTITY_TOKEN_EXPIRE_HOURS))
    to_encode["exp"] = expire
    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


def decode_identity_token(token: str) -> Optional[Identity]:
    """Decode and validate an identity token. Returns Identity or None."""
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[ALGORITHM],
            audience=settings.identity_token_audience,
            options={"verify_aud": settings.identity_token_audience is not None},
        )
    except JWTError:
        return None
    user_id = payload.get("sub")
    if not user_id or not isinstance(user_id, str):
        return None
    return Identity(user_id=user_id, email=payload.get("email"), name=payload.get("name"))


def get_user(db: Session, user_id: str) -> Optional[User]:
    """Return the profile for user_id, or None when it does not resolve."""
    return db.query(User).filter(User.user_id == user_id).first()


def sync_user(
    db: Session,
    user_id: str,
    email: str | None = None,
    name: str | None = None,
) -> tuple[User, bool]:
    """Create the profile on first sight, otherwise fill in newly supplied fields.

    Returns (user, created).
    """
    user = get_user(db, user_id)
    if user is None:
        user = User(user_id=user_id, email=email, name=name)
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info("Registered user profile %s", user_id)
        return user, True

    changed = False
    if email and email != user.email:
        user.email = email
        changed = True
    if name and name != user.name:
        user.name = name
        changed = True
    if changed:
        db.commit()
        db.refresh(user)
    return user, False
