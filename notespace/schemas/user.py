"""Identity profile schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class UserSyncRequest(BaseModel):
    """Profile fields the client may send alongside its identity token.

    Token claims take precedence over body values.
    """

    email: str | None = Field(None, max_length=255)
    name: str | None = Field(None, max_length=255)


class UserRead(BaseModel):
    """Schema for reading a user profile (response)."""

    model_config = ConfigDict(from_attributes=True)

    user_id: str
    email: str | None
    name: str | None


class UserSyncResponse(UserRead):
    """Profile plus whether this call registered it."""

    is_new_user: bool
