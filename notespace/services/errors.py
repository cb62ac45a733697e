"""Error taxonomy for workspace, membership, invitation and note operations.

All errors are terminal from the service's point of view; callers decide
whether to retry. The API layer maps ``status_code`` / ``code`` to responses.
"""

from __future__ import annotations


class WorkspaceServiceError(Exception):
    """Base class for expected, caller-facing failures."""

    status_code: int = 400
    code: str = "error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(WorkspaceServiceError):
    """Malformed or missing input (caller bug)."""

    status_code = 400
    code = "validation_error"


class NotFoundError(WorkspaceServiceError):
    """Workspace, note or member does not exist."""

    status_code = 404
    code = "not_found"


class ForbiddenError(WorkspaceServiceError):
    """Caller is authenticated but not a member or lacks the required role."""

    status_code = 403
    code = "forbidden"


class AlreadyMemberError(WorkspaceServiceError):
    """Redeeming user already has a membership in the workspace."""

    status_code = 409
    code = "already_member"


class ExpiredError(WorkspaceServiceError):
    """Invitation token is older than the invitation window."""

    status_code = 410
    code = "invitation_expired"


class InvalidTokenError(WorkspaceServiceError):
    """Invitation token failed to parse or its secret does not match."""

    status_code = 400
    code = "invalid_token"


class ConflictError(WorkspaceServiceError):
    """Operation would violate a workspace invariant (e.g. no admin left)."""

    status_code = 409
    code = "conflict"
