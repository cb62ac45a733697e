"""Workspace, membership and invitation schemas for request/response validation."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from notespace.models.workspace_member import WorkspaceRole


class WorkspaceSettings(BaseModel):
    """Reserved policy flags."""

    allow_public_read: bool
    require_approval: bool


class WorkspaceCreateRequest(BaseModel):
    """Schema for creating a workspace."""

    name: str = Field(..., max_length=255)
    description: str | None = Field(None, max_length=2000)


class WorkspaceUpdateRequest(BaseModel):
    """Schema for updating workspace metadata and settings; omitted fields are unchanged."""

    name: str | None = Field(None, max_length=255)
    description: str | None = Field(None, max_length=2000)
    allow_public_read: bool | None = None
    require_approval: bool | None = None


class WorkspaceRead(BaseModel):
    """Workspace as seen by its members."""

    model_config = ConfigDict(from_attributes=True)

    workspace_id: str
    name: str
    description: str
    created_by: str
    settings: WorkspaceSettings
    created_at: datetime
    updated_at: datetime


class WorkspaceAdminRead(WorkspaceRead):
    """Workspace including its invitation secret. Admin responses only."""

    invitation_code: str


class WorkspaceWithRole(WorkspaceRead):
    """Workspace plus the caller's role in it."""

    role: WorkspaceRole


class WorkspaceListResponse(BaseModel):
    """Schema for the caller's workspace list."""

    workspaces: list[WorkspaceWithRole]


class MemberRead(BaseModel):
    """Membership row (optionally joined with profile fields)."""

    model_config = ConfigDict(from_attributes=True)

    user_id: str
    role: WorkspaceRole
    joined_at: datetime
    invited_by: str
    email: str | None = None
    name: str | None = None


class MemberListResponse(BaseModel):
    """Schema for the member list response."""

    members: list[MemberRead]


class RoleChangeRequest(BaseModel):
    """Schema for changing a member's role."""

    role: WorkspaceRole


class WorkspaceCreateResponse(BaseModel):
    """Created workspace and the creator's admin membership."""

    workspace: WorkspaceAdminRead
    member: MemberRead


class InvitationResponse(BaseModel):
    """Generated invitation link."""

    invitation_link: str
    invitation_code: str
    token: str
    expires_at: datetime


class JoinRequest(BaseModel):
    """Schema for redeeming an invitation; accepts a bare token or a full link."""

    invitation_token: str = Field(..., min_length=1, max_length=512)


class JoinResponse(BaseModel):
    """Joined workspace and the new membership."""

    workspace: WorkspaceRead
    member: MemberRead
