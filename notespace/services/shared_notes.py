"""Shared note store: CRUD for workspace notes behind the access gate."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from notespace.models.workspace_note import DEFAULT_NOTE_TITLE, WorkspaceNote
from notespace.services.errors import NotFoundError
from notespace.services.workspace_access import require_member, require_writer

logger = logging.getLogger(__name__)


def _normalize_title(title: str | None) -> str:
    clean = (title or "").strip()
    return clean or DEFAULT_NOTE_TITLE


def _get_note_or_404(db: Session, workspace_id: str, note_id: str) -> WorkspaceNote:
    note = (
        db.query(WorkspaceNote)
        .filter(
            WorkspaceNote.workspace_id == workspace_id,
            WorkspaceNote.note_id == note_id,
        )
        .first()
    )
    if note is None:
        raise NotFoundError("Note not found")
    return note


def list_notes(db: Session, workspace_id: str, caller_id: str) -> list[WorkspaceNote]:
    """Return the workspace's notes, most recently updated first. Any member."""
    require_member(db, workspace_id, caller_id)
    return (
        db.query(WorkspaceNote)
        .filter(WorkspaceNote.workspace_id == workspace_id)
        .order_by(WorkspaceNote.updated_at.desc(), WorkspaceNote.created_at.desc())
        .all()
    )


def get_note(db: Session, workspace_id: str, note_id: str, caller_id: str) -> WorkspaceNote:
    """Return one note. Any member."""
    require_member(db, workspace_id, caller_id)
    return _get_note_or_404(db, workspace_id, note_id)


def create_note(
    db: Session,
    workspace_id: str,
    caller_id: str,
    title: str | None,
    content: str | None,
) -> WorkspaceNote:
    """Create a note. Requires admin or read-write.

    A blank title is stored as the "Untitled Note" placeholder.
    """
    require_writer(db, workspace_id, caller_id)

    now = datetime.now(UTC)
    note = WorkspaceNote(
        note_id=str(uuid.uuid4()),
        workspace_id=workspace_id,
        title=_normalize_title(title),
        content=content or "",
        created_by=caller_id,
        last_edited_by=caller_id,
        created_at=now,
        updated_at=now,
    )
    db.add(note)
    db.commit()
    db.refresh(note)
    logger.info("Note %s created in workspace %s by %s", note.note_id, workspace_id, caller_id)
    return note


def update_note(
    db: Session,
    workspace_id: str,
    note_id: str,
    caller_id: str,
    title: str | None = None,
    content: str | None = None,
) -> WorkspaceNote:
    """Partially update a note. Requires admin or read-write.

    None leaves a field unchanged. updated_at and last_edited_by are refreshed
    on every accepted call, even when neither field is supplied.
    """
    require_writer(db, workspace_id, caller_id)
    note = _get_note_or_404(db, workspace_id, note_id)

    if title is not None:
        note.title = _normalize_title(title)
    if content is not None:
        note.content = content
    note.updated_at = datetime.now(UTC)
    note.last_edited_by = caller_id

    db.commit()
    db.refresh(note)
    return note


def delete_note(db: Session, workspace_id: str, note_id: str, caller_id: str) -> None:
    """Hard-delete a note. Requires admin or read-write."""
    require_writer(db, workspace_id, caller_id)
    note = _get_note_or_404(db, workspace_id, note_id)
    db.delete(note)
    db.commit()
    logger.info("Note %s deleted from workspace %s by %s", note_id, workspace_id, caller_id)
