"""Workspace access control.

Every note and membership mutation asks this module first. Membership rows in
workspace_members are the only source of truth; there is no default workspace
and no global admin bypass.
"""

from __future__ import annotations

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from notespace.models.workspace import Workspace
from notespace.models.workspace_member import WorkspaceMember, WorkspaceRole
from notespace.services.errors import ConflictError, ForbiddenError, NotFoundError

logger = logging.getLogger(__name__)


def get_membership(db: Session, workspace_id: str, user_id: str) -> WorkspaceMember | None:
    """Return the membership row for (workspace_id, user_id), or None."""
    return (
        db.query(WorkspaceMember)
        .filter(
            WorkspaceMember.workspace_id == workspace_id,
            WorkspaceMember.user_id == user_id,
        )
        .first()
    )


def check_role(db: Session, workspace_id: str, user_id: str) -> WorkspaceRole | None:
    """Return the user's role in the workspace, or None when not a member."""
    membership = get_membership(db, workspace_id, user_id)
    if membership is None:
        return None
    return membership.workspace_role


def _deny(db: Session, workspace_id: str, user_id: str, message: str) -> None:
    """Raise NotFoundError for unknown workspaces, ForbiddenError otherwise."""
    exists = (
        db.query(Workspace.workspace_id)
        .filter(Workspace.workspace_id == workspace_id)
        .first()
        is not None
    )
    if not exists:
        raise NotFoundError("Workspace not found")
    logger.warning("Denied user %s on workspace %s: %s", user_id, workspace_id, message)
    raise ForbiddenError(message)


def require_member(db: Session, workspace_id: str, user_id: str) -> WorkspaceRole:
    """Allow any role (note reads, member listing)."""
    role = check_role(db, workspace_id, user_id)
    if role is None:
        _deny(db, workspace_id, user_id, "Not a member of this workspace")
    return role


def require_writer(db: Session, workspace_id: str, user_id: str) -> WorkspaceRole:
    """Allow admin and read-write (note mutations, workspace settings)."""
    role = require_member(db, workspace_id, user_id)
    if not role.can_write:
        _deny(db, workspace_id, user_id, "Read-only access")
    return role


def require_admin(db: Session, workspace_id: str, user_id: str) -> WorkspaceRole:
    """Allow admin only (membership management, invitations)."""
    role = require_member(db, workspace_id, user_id)
    if role is not WorkspaceRole.ADMIN:
        _deny(db, workspace_id, user_id, "Admin role required")
    return role


def count_admins(db: Session, workspace_id: str) -> int:
    """Number of admin memberships currently stored for the workspace."""
    return (
        db.query(func.count())
        .select_from(WorkspaceMember)
        .filter(
            WorkspaceMember.workspace_id == workspace_id,
            WorkspaceMember.role == WorkspaceRole.ADMIN.value,
        )
        .scalar()
        or 0
    )


def ensure_admin_remains(
    db: Session,
    workspace_id: str,
    target: WorkspaceMember,
    new_role: WorkspaceRole | None,
) -> None:
    """Raise ConflictError if changing target to new_role leaves zero admins.

    new_role=None means the membership is being removed. The check runs
    against the state this session observes; two concurrent demotions can
    still both pass.
    """
    if target.workspace_role is not WorkspaceRole.ADMIN:
        return
    if new_role is WorkspaceRole.ADMIN:
        return
    if count_admins(db, workspace_id) <= 1:
        raise ConflictError("Workspace must keep at least one admin")
