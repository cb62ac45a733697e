"""Identity profile routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from notespace.api.deps import get_db, require_auth
from notespace.schemas.user import UserRead, UserSyncRequest, UserSyncResponse
from notespace.services.identity import Identity, get_user, sync_user

router = APIRouter()


@router.post("/sync", response_model=UserSyncResponse)
def api_sync_user(
    response: Response,
    body: UserSyncRequest | None = None,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> UserSyncResponse:
    """Register or refresh the caller's profile.

    Returns 201 on first registration, 200 afterwards.
    """
    email = identity.email or (body.email if body else None)
    name = identity.name or (body.name if body else None)
    user, created = sync_user(db, identity.user_id, email=email, name=name)
    if created:
        response.status_code = status.HTTP_201_CREATED
    return UserSyncResponse(
        user_id=user.user_id,
        email=user.email,
        name=user.name,
        is_new_user=created,
    )


@router.get("/me", response_model=UserRead)
def api_me(
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> UserRead:
    """Return the caller's stored profile."""
    user = get_user(db, identity.user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User profile not synced")
    return UserRead.model_validate(user)
