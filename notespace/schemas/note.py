"""Shared note schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class NoteCreateRequest(BaseModel):
    """Schema for creating a note; a blank title becomes "Untitled Note"."""

    title: str | None = Field(None, max_length=500)
    content: str | None = None


class NoteUpdateRequest(BaseModel):
    """Partial update; omitted or null fields are left unchanged."""

    title: str | None = Field(None, max_length=500)
    content: str | None = None


class NoteRead(BaseModel):
    """Schema for reading a note (response)."""

    model_config = ConfigDict(from_attributes=True)

    note_id: str
    workspace_id: str
    title: str
    content: str
    created_by: str
    last_edited_by: str
    created_at: datetime
    updated_at: datetime


class NoteListResponse(BaseModel):
    """Schema for the note list response."""

    notes: list[NoteRead]
