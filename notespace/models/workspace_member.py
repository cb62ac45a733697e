"""WorkspaceMember model: (workspace, user) to role, the authorization fact."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from notespace.db.session import Base

if TYPE_CHECKING:
    from notespace.models.workspace import Workspace


class WorkspaceRole(str, Enum):
    """Closed set of membership roles, ordered admin > read-write > read-only."""

    ADMIN = "admin"
    READ_WRITE = "read-write"
    READ_ONLY = "read-only"

    @property
    def rank(self) -> int:
        return _ROLE_RANK[self]

    @property
    def can_write(self) -> bool:
        return self.rank >= _ROLE_RANK[WorkspaceRole.READ_WRITE]


_ROLE_RANK = {
    WorkspaceRole.READ_ONLY: 1,
    WorkspaceRole.READ_WRITE: 2,
    WorkspaceRole.ADMIN: 3,
}


class WorkspaceMember(Base):
    """User membership in a workspace.

    The composite primary key is the uniqueness constraint that rejects a
    second membership row for the same (workspace, user) pair.
    """

    __tablename__ = "workspace_members"

    __table_args__ = (
        Index("ix_workspace_members_user_id", "user_id"),
        CheckConstraint(
            "role IN ('admin', 'read-write', 'read-only')",
            name="ck_workspace_members_role",
        ),
    )

    workspace_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("workspaces.workspace_id"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )
    invited_by: Mapped[str] = mapped_column(String(128), nullable=False)

    workspace: Mapped[Workspace] = relationship("Workspace", back_populates="members")

    @property
    def workspace_role(self) -> WorkspaceRole:
        return WorkspaceRole(self.role)
