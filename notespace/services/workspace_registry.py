"""Workspace registry: create, look up, list and configure workspaces."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from notespace.models.workspace import Workspace
from notespace.models.workspace_member import WorkspaceMember, WorkspaceRole
from notespace.services.errors import NotFoundError, ValidationError
from notespace.services.identity import get_user
from notespace.services.workspace_access import require_admin, require_writer

logger = logging.getLogger(__name__)

INVITATION_CODE_LENGTH = 8


def generate_invitation_code() -> str:
    """Short uppercase secret, typed back by humans; first 8 hex chars of a UUID4."""
    return uuid.uuid4().hex[:INVITATION_CODE_LENGTH].upper()


def create_workspace(
    db: Session,
    name: str,
    description: str | None,
    creator_id: str,
) -> Workspace:
    """Create a workspace and its creator's admin membership.

    Both rows are flushed in one transaction and committed once, so callers
    never observe a workspace without an admin.
    Raises ValidationError when name is blank or creator_id has no profile.
    """
    clean_name = (name or "").strip()
    if not clean_name:
        raise ValidationError("Workspace name is required")
    if not creator_id or get_user(db, creator_id) is None:
        raise ValidationError("Creator does not resolve to a known user")

    now = datetime.now(UTC)
    workspace = Workspace(
        workspace_id=str(uuid.uuid4()),
        name=clean_name,
        description=(description or "").strip(),
        created_by=creator_id,
        invitation_code=generate_invitation_code(),
        allow_public_read=False,
        require_approval=True,
        created_at=now,
        updated_at=now,
    )
    admin = WorkspaceMember(
        workspace_id=workspace.workspace_id,
        user_id=creator_id,
        role=WorkspaceRole.ADMIN.value,
        joined_at=now,
        invited_by=creator_id,
    )
    try:
        db.add(workspace)
        db.flush()
        db.add(admin)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(workspace)
    logger.info("Workspace %s created by %s", workspace.workspace_id, creator_id)
    return workspace


def get_workspace(db: Session, workspace_id: str) -> Workspace:
    """Return the workspace or raise NotFoundError."""
    workspace = db.query(Workspace).filter(Workspace.workspace_id == workspace_id).first()
    if workspace is None:
        raise NotFoundError("Workspace not found")
    return workspace


def list_workspaces_for_user(db: Session, user_id: str) -> list[tuple[Workspace, WorkspaceRole]]:
    """Return (workspace, role) for every membership of user_id.

    Inner join: memberships pointing at a workspace that no longer exists are
    dropped rather than reported.
    """
    rows = (
        db.query(Workspace, WorkspaceMember.role)
        .join(WorkspaceMember, WorkspaceMember.workspace_id == Workspace.workspace_id)
        .filter(WorkspaceMember.user_id == user_id)
        .order_by(Workspace.created_at.desc())
        .all()
    )
    return [(workspace, WorkspaceRole(role)) for workspace, role in rows]


def update_workspace(
    db: Session,
    workspace_id: str,
    caller_id: str,
    *,
    name: str | None = None,
    description: str | None = None,
    allow_public_read: bool | None = None,
    require_approval: bool | None = None,
) -> Workspace:
    """Update display metadata and policy flags. Requires admin or read-write.

    Only supplied (non-None) fields change.
    """
    require_writer(db, workspace_id, caller_id)
    workspace = get_workspace(db, workspace_id)

    if name is not None:
        clean_name = name.strip()
        if not clean_name:
            raise ValidationError("Workspace name is required")
        workspace.name = clean_name
    if description is not None:
        workspace.description = description.strip()
    if allow_public_read is not None:
        workspace.allow_public_read = allow_public_read
    if require_approval is not None:
        workspace.require_approval = require_approval
    workspace.updated_at = datetime.now(UTC)

    db.commit()
    db.refresh(workspace)
    return workspace


def rotate_invitation_code(db: Session, workspace_id: str, caller_id: str) -> Workspace:
    """Replace the invitation secret. Admin only.

    Every token issued under the previous code stops validating.
    """
    require_admin(db, workspace_id, caller_id)
    workspace = get_workspace(db, workspace_id)

    previous = workspace.invitation_code
    code = generate_invitation_code()
    while code == previous:
        code = generate_invitation_code()
    workspace.invitation_code = code
    workspace.updated_at = datetime.now(UTC)

    db.commit()
    db.refresh(workspace)
    logger.info("Invitation code rotated for workspace %s by %s", workspace_id, caller_id)
    return workspace
