"""WorkspaceNote model: note shared inside a workspace (last write wins)."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from notespace.db.session import Base

if TYPE_CHECKING:
    from notespace.models.workspace import Workspace

DEFAULT_NOTE_TITLE = "Untitled Note"


class WorkspaceNote(Base):
    """Shared note. Authorship columns are kept after the author leaves."""

    __tablename__ = "workspace_notes"

    __table_args__ = (
        Index("ix_workspace_notes_workspace_updated", "workspace_id", "updated_at"),
    )

    note_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    workspace_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("workspaces.workspace_id"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String(500), default=DEFAULT_NOTE_TITLE, nullable=False)
    content: Mapped[str] = mapped_column(Text, default="", nullable=False)
    created_by: Mapped[str] = mapped_column(String(128), nullable=False)
    last_edited_by: Mapped[str] = mapped_column(String(128), nullable=False)
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

    workspace: Mapped[Workspace] = relationship("Workspace", back_populates="notes")
