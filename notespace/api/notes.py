"""Shared note API routes, nested under a workspace."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from notespace.api.deps import get_db, require_auth
from notespace.schemas.note import (
    NoteCreateRequest,
    NoteListResponse,
    NoteRead,
    NoteUpdateRequest,
)
from notespace.services.identity import Identity
from notespace.services.shared_notes import (
    create_note,
    delete_note,
    get_note,
    list_notes,
    update_note,
)

router = APIRouter()


@router.get("/{workspace_id}/notes", response_model=NoteListResponse)
def api_list_notes(
    workspace_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> NoteListResponse:
    """List notes, most recently updated first. Any member."""
    notes = list_notes(db, workspace_id, identity.user_id)
    return NoteListResponse(notes=[NoteRead.model_validate(n) for n in notes])


@router.post("/{workspace_id}/notes", status_code=201, response_model=NoteRead)
def api_create_note(
    workspace_id: str,
    data: NoteCreateRequest,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> NoteRead:
    """Create a note. Admin or read-write."""
    note = create_note(db, workspace_id, identity.user_id, data.title, data.content)
    return NoteRead.model_validate(note)


@router.get("/{workspace_id}/notes/{note_id}", response_model=NoteRead)
def api_get_note(
    workspace_id: str,
    note_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> NoteRead:
    """Return one note. Any member."""
    return NoteRead.model_validate(get_note(db, workspace_id, note_id, identity.user_id))


@router.patch("/{workspace_id}/notes/{note_id}", response_model=NoteRead)
def api_update_note(
    workspace_id: str,
    note_id: str,
    data: NoteUpdateRequest,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> NoteRead:
    """Partially update a note. Admin or read-write."""
    note = update_note(
        db,
        workspace_id,
        note_id,
        identity.user_id,
        title=data.title,
        content=data.content,
    )
    return NoteRead.model_validate(note)


@router.delete("/{workspace_id}/notes/{note_id}", status_code=204)
def api_delete_note(
    workspace_id: str,
    note_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
) -> None:
    """Delete a note. Admin or read-write."""
    delete_note(db, workspace_id, note_id, identity.user_id)
