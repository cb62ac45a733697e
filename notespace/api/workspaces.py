"""Workspace, invitation and membership API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from notespace.api.deps import get_db, require_auth
from notespace.models.workspace import Workspace
from notespace.models.workspace_member import WorkspaceRole
from notespace.schemas.workspace import (
    InvitationResponse,
    JoinRequest,
    JoinResponse,
    MemberListResponse,
    MemberRead,
    RoleChangeRequest,
    WorkspaceAdminRead,
    WorkspaceCreateRequest,
    WorkspaceCreateResponse,
    WorkspaceListResponse,
    WorkspaceRead,
    WorkspaceUpdateRequest,
    WorkspaceWithRole,
)
from notespace.services.identity import Identity
from notespace.services.invitations import (
    generate_invitation,
    redeem_invitation,
    token_from_link,
)
from notespace.services.membership import change_role, list_members, remove_member
from notespace.services.workspace_access import get_membership, require_member
from notespace.services.workspace_registry import (
    create_workspace,
    get_workspace,
    list_workspaces_for_user,
    rotate_invitation_code,
    update_workspace,
)

router = APIRouter()


def _with_role(workspace: Workspace, role: WorkspaceRole) -> WorkspaceWithRole:
    data = WorkspaceRead.model_validate(workspace).model_dump()
    return WorkspaceWithRole(**data, role=role)


@router.post("", status_code=201, response_model=WorkspaceCreateResponse)
def api_create_workspace(
    data: WorkspaceCreateRequest,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> WorkspaceCreateResponse:
    """Create a workspace; the caller becomes its first admin."""
    workspace = create_workspace(db, data.name, data.description, identity.user_id)
    member = get_membership(db, workspace.workspace_id, identity.user_id)
    return WorkspaceCreateResponse(
        workspace=WorkspaceAdminRead.model_validate(workspace),
        member=MemberRead.model_validate(member),
    )


@router.get("", response_model=WorkspaceListResponse)
def api_list_workspaces(
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> WorkspaceListResponse:
    """List the caller's workspaces with their role in each."""
    rows = list_workspaces_for_user(db, identity.user_id)
    return WorkspaceListResponse(workspaces=[_with_role(ws, role) for ws, role in rows])


@router.post("/join", response_model=JoinResponse)
def api_join_workspace(
    data: JoinRequest,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> JoinResponse:
    """Redeem an invitation token (or link) as the caller."""
    workspace, member = redeem_invitation(
        db, token_from_link(data.invitation_token), identity.user_id
    )
    return JoinResponse(
        workspace=WorkspaceRead.model_validate(workspace),
        member=MemberRead.model_validate(member),
    )


@router.get("/{workspace_id}", response_model=WorkspaceWithRole)
def api_get_workspace(
    workspace_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> WorkspaceWithRole:
    """Return one workspace. Members only."""
    role = require_member(db, workspace_id, identity.user_id)
    return _with_role(get_workspace(db, workspace_id), role)


@router.patch("/{workspace_id}", response_model=WorkspaceRead)
def api_update_workspace(
    workspace_id: str,
    data: WorkspaceUpdateRequest,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> WorkspaceRead:
    """Update name, description or settings. Admin or read-write."""
    workspace = update_workspace(
        db,
        workspace_id,
        identity.user_id,
        name=data.name,
        description=data.description,
        allow_public_read=data.allow_public_read,
        require_approval=data.require_approval,
    )
    return WorkspaceRead.model_validate(workspace)


@router.post("/{workspace_id}/invitations", response_model=InvitationResponse)
def api_generate_invitation(
    workspace_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> InvitationResponse:
    """Issue an invitation link valid for seven days. Admin only."""
    invitation = generate_invitation(db, workspace_id, identity.user_id)
    return InvitationResponse(
        invitation_link=invitation.invitation_link,
        invitation_code=invitation.invitation_code,
        token=invitation.token,
        expires_at=invitation.expires_at,
    )


@router.post("/{workspace_id}/invitation-code/rotate", response_model=WorkspaceAdminRead)
def api_rotate_invitation_code(
    workspace_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> WorkspaceAdminRead:
    """Rotate the invitation code, revoking every outstanding link. Admin only."""
    workspace = rotate_invitation_code(db, workspace_id, identity.user_id)
    return WorkspaceAdminRead.model_validate(workspace)


@router.get("/{workspace_id}/members", response_model=MemberListResponse)
def api_list_members(
    workspace_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> MemberListResponse:
    """List members with profile details. Members only."""
    members = list_members(db, workspace_id, identity.user_id)
    return MemberListResponse(members=[MemberRead.model_validate(m) for m in members])


@router.patch("/{workspace_id}/members/{target_user_id}", response_model=MemberRead)
def api_change_role(
    workspace_id: str,
    target_user_id: str,
    data: RoleChangeRequest,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> MemberRead:
    """Change a member's role. Admin only; the last admin cannot be demoted."""
    member = change_role(db, workspace_id, identity.user_id, target_user_id, data.role)
    return MemberRead.model_validate(member)


@router.delete("/{workspace_id}/members/{target_user_id}", status_code=204)
def api_remove_member(
    workspace_id: str,
    target_user_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> None:
    """Remove a member. Admin only; the last admin cannot be removed."""
    remove_member(db, workspace_id, identity.user_id, target_user_id)
