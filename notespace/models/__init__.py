"""SQLAlchemy models."""

from notespace.models.user import User
from notespace.models.workspace import Workspace
from notespace.models.workspace_member import WorkspaceMember, WorkspaceRole
from notespace.models.workspace_note import WorkspaceNote

__all__ = [
    "User",
    "Workspace",
    "WorkspaceMember",
    "WorkspaceNote",
    "WorkspaceRole",
]
