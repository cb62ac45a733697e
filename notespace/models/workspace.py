"""Workspace model: named collaboration boundary for notes and members."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from notespace.db.session import Base

if TYPE_CHECKING:
    from notespace.models.workspace_member import WorkspaceMember
    from notespace.models.workspace_note import WorkspaceNote


class Workspace(Base):
    """Shared workspace with its rotatable invitation secret and policy flags."""

    __tablename__ = "workspaces"

    workspace_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    created_by: Mapped[str] = mapped_column(String(128), nullable=False)
    invitation_code: Mapped[str] = mapped_column(String(32), nullable=False)

    # Reserved policy flags; stored and editable, not enforced by the join flow
    allow_public_read: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    require_approval: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    members: Mapped[list[WorkspaceMember]] = relationship(
        "WorkspaceMember",
        back_populates="workspace",
        lazy="select",
    )
    notes: Mapped[list[WorkspaceNote]] = relationship(
        "WorkspaceNote",
        back_populates="workspace",
        lazy="select",
    )

    @property
    def settings(self) -> dict[str, bool]:
        """Policy flags in the shape exposed to clients."""
        return {
            "allow_public_read": self.allow_public_read,
            "require_approval": self.require_approval,
        }
