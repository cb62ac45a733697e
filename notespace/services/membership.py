"""Membership management: list members, change roles, remove members."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import case
from sqlalchemy.orm import Session

from notespace.models.user import User
from notespace.models.workspace_member import WorkspaceMember, WorkspaceRole
from notespace.services.errors import NotFoundError, ValidationError
from notespace.services.workspace_access import (
    ensure_admin_remains,
    get_membership,
    require_admin,
    require_member,
)

logger = logging.getLogger(__name__)


@dataclass
class MemberView:
    """Membership joined with the member's profile (email/name may be unknown)."""

    user_id: str
    role: WorkspaceRole
    joined_at: datetime
    invited_by: str
    email: str | None
    name: str | None


def parse_role(value: str | WorkspaceRole) -> WorkspaceRole:
    """Coerce value to WorkspaceRole or raise ValidationError."""
    if isinstance(value, WorkspaceRole):
        return value
    try:
        return WorkspaceRole(value)
    except ValueError:
        allowed = ", ".join(r.value for r in WorkspaceRole)
        raise ValidationError(f"Unknown role {value!r}; expected one of: {allowed}") from None


def list_members(db: Session, workspace_id: str, caller_id: str) -> list[MemberView]:
    """List members of a workspace. Any member may call this.

    Admins first, then read-write, then read-only; oldest membership first
    within a role. Members without a synced profile keep email/name None.
    """
    require_member(db, workspace_id, caller_id)

    role_order = case(
        (WorkspaceMember.role == WorkspaceRole.ADMIN.value, 0),
        (WorkspaceMember.role == WorkspaceRole.READ_WRITE.value, 1),
        else_=2,
    )
    rows = (
        db.query(WorkspaceMember, User.email, User.name)
        .outerjoin(User, User.user_id == WorkspaceMember.user_id)
        .filter(WorkspaceMember.workspace_id == workspace_id)
        .order_by(role_order, WorkspaceMember.joined_at.asc())
        .all()
    )
    return [
        MemberView(
            user_id=member.user_id,
            role=member.workspace_role,
            joined_at=member.joined_at,
            invited_by=member.invited_by,
            email=email,
            name=name,
        )
        for member, email, name in rows
    ]


def change_role(
    db: Session,
    workspace_id: str,
    caller_id: str,
    target_user_id: str,
    new_role: str | WorkspaceRole,
) -> WorkspaceMember:
    """Set target's role. Admin only.

    Raises ForbiddenError (caller not admin), NotFoundError (target not a
    member), ValidationError (unknown role) or ConflictError (would leave the
    workspace without an admin; state unchanged).
    """
    role = parse_role(new_role)
    require_admin(db, workspace_id, caller_id)

    target = get_membership(db, workspace_id, target_user_id)
    if target is None:
        raise NotFoundError("Member not found")
    if target.workspace_role is role:
        return target

    ensure_admin_remains(db, workspace_id, target, role)

    previous = target.role
    target.role = role.value
    db.commit()
    db.refresh(target)
    logger.info(
        "Role of %s in workspace %s changed %s -> %s by %s",
        target_user_id,
        workspace_id,
        previous,
        role.value,
        caller_id,
    )
    return target


def remove_member(db: Session, workspace_id: str, caller_id: str, target_user_id: str) -> None:
    """Delete target's membership. Admin only.

    Notes the member created or edited keep their authorship fields.
    Raises ConflictError when the target is the last admin (including an
    admin removing themselves).
    """
    require_admin(db, workspace_id, caller_id)

    target = get_membership(db, workspace_id, target_user_id)
    if target is None:
        raise NotFoundError("Member not found")

    ensure_admin_remains(db, workspace_id, target, None)

    db.delete(target)
    db.commit()
    logger.info("Removed %s from workspace %s (by %s)", target_user_id, workspace_id, caller_id)
