"""Invitation engine: issue and redeem workspace invitation tokens.

Token format (case-sensitive, unsigned)::

    {workspace_id}-{invitation_code}-{issued_at_millis}

The token is valid while its code equals the workspace's current
invitation_code and it is at most seven days old. Rotating the code is the
only way to revoke tokens, and it revokes all of them. A token names no
invitee: any authenticated user may redeem it once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from notespace.config import get_settings
from notespace.models.workspace import Workspace
from notespace.models.workspace_member import WorkspaceMember, WorkspaceRole
from notespace.services.errors import (
    AlreadyMemberError,
    ExpiredError,
    InvalidTokenError,
)
from notespace.services.workspace_access import get_membership, require_admin
from notespace.services.workspace_registry import get_workspace

logger = logging.getLogger(__name__)

TOKEN_SEPARATOR = "-"
INVITATION_TTL = timedelta(days=7)
INVITATION_TTL_MS = INVITATION_TTL // timedelta(milliseconds=1)
# Tolerated lead of a token's issue time over the server clock
CLOCK_SKEW = timedelta(minutes=5)
CLOCK_SKEW_MS = CLOCK_SKEW // timedelta(milliseconds=1)

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

# Fixed role for self-service joins; the joiner cannot choose
REDEEMED_ROLE = WorkspaceRole.READ_WRITE


@dataclass(frozen=True)
class ParsedToken:
    """Claims carried by an invitation token."""

    workspace_id: str
    invitation_code: str
    issued_at_ms: int


@dataclass(frozen=True)
class Invitation:
    """Result of generate_invitation."""

    token: str
    invitation_link: str
    invitation_code: str
    expires_at: datetime


def to_millis(moment: datetime) -> int:
    """Epoch milliseconds for an aware datetime (naive values are taken as UTC)."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return (moment - _EPOCH) // timedelta(milliseconds=1)


def build_invitation_token(workspace_id: str, invitation_code: str, issued_at_ms: int) -> str:
    """Join the three claims with the separator."""
    return TOKEN_SEPARATOR.join((workspace_id, invitation_code, str(issued_at_ms)))


def parse_invitation_token(token: str) -> ParsedToken:
    """Split a token from the right.

    The last segment is the issue time, the one before it the code, and
    everything else the workspace id (UUIDs contain the separator).
    Raises InvalidTokenError when the token cannot be parsed.
    """
    parts = (token or "").strip().rsplit(TOKEN_SEPARATOR, 2)
    if len(parts) != 3 or not all(parts):
        raise InvalidTokenError("Invalid invitation link")
    workspace_id, invitation_code, issued = parts
    if not (issued.isascii() and issued.isdigit()):
        raise InvalidTokenError("Invalid invitation link")
    try:
        issued_at_ms = int(issued)
    except ValueError:
        # Digit run longer than the interpreter will convert
        raise InvalidTokenError("Invalid invitation link") from None
    return ParsedToken(
        workspace_id=workspace_id,
        invitation_code=invitation_code,
        issued_at_ms=issued_at_ms,
    )


def token_from_link(value: str) -> str:
    """Accept either a bare token or a full invitation link."""
    value = (value or "").strip()
    if "/" in value:
        value = value.rstrip("/").rsplit("/", 1)[-1]
    return value


def is_expired(issued_at_ms: int, now_ms: int) -> bool:
    """True once more than seven days have elapsed since issue."""
    return now_ms - issued_at_ms > INVITATION_TTL_MS


def is_future_dated(issued_at_ms: int, now_ms: int) -> bool:
    """True when the token claims an issue time beyond the tolerated clock skew."""
    return issued_at_ms - now_ms > CLOCK_SKEW_MS


def generate_invitation(
    db: Session,
    workspace_id: str,
    caller_id: str,
    now: datetime | None = None,
) -> Invitation:
    """Issue an invitation link for the workspace. Admin only."""
    workspace = get_workspace(db, workspace_id)
    require_admin(db, workspace_id, caller_id)

    issued_at = now or datetime.now(UTC)
    token = build_invitation_token(
        workspace.workspace_id, workspace.invitation_code, to_millis(issued_at)
    )
    base_url = get_settings().app_url
    logger.info("Invitation issued for workspace %s by %s", workspace_id, caller_id)
    return Invitation(
        token=token,
        invitation_link=f"{base_url}/join/{token}",
        invitation_code=workspace.invitation_code,
        expires_at=issued_at + INVITATION_TTL,
    )


def redeem_invitation(
    db: Session,
    token: str,
    user_id: str,
    now: datetime | None = None,
) -> tuple[Workspace, WorkspaceMember]:
    """Join the workspace named by token as read-write.

    Checks run in order: parse, expiry, issue time not in the future, secret
    match, existing membership.
    Raises InvalidTokenError, ExpiredError or AlreadyMemberError.
    """
    parsed = parse_invitation_token(token)

    moment = now or datetime.now(UTC)
    now_ms = to_millis(moment)
    if is_expired(parsed.issued_at_ms, now_ms):
        raise ExpiredError("Invitation link has expired")
    if is_future_dated(parsed.issued_at_ms, now_ms):
        raise InvalidTokenError("Invalid invitation link")

    workspace = (
        db.query(Workspace)
        .filter(
            Workspace.workspace_id == parsed.workspace_id,
            Workspace.invitation_code == parsed.invitation_code,
        )
        .first()
    )
    if workspace is None:
        raise InvalidTokenError("Invalid invitation link")

    if get_membership(db, workspace.workspace_id, user_id) is not None:
        raise AlreadyMemberError("Already a member of this workspace")

    member = WorkspaceMember(
        workspace_id=workspace.workspace_id,
        user_id=user_id,
        role=REDEEMED_ROLE.value,
        joined_at=moment,
        invited_by=workspace.created_by,
    )
    db.add(member)
    try:
        db.commit()
    except IntegrityError:
        # Concurrent redemption by the same user won the primary-key race
        db.rollback()
        raise AlreadyMemberError("Already a member of this workspace") from None
    db.refresh(member)
    logger.info("User %s joined workspace %s via invitation", user_id, workspace.workspace_id)
    return workspace, member
