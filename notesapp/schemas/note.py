"""
Note Schemas

Request/response models for note operations.
"""
from pydantic import Field, field_validator
from typing import Optional, List
from datetime import datetime

from notesapp.schemas.base import APIModel


class NoteCreate(APIModel):
    """Schema for creating a note."""
    title: str = Field(..., min_length=1)
    content: Optional[str] = None


class NoteUpdate(APIModel):
    """Schema for updating a note. Omitted fields keep their value."""
    title: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_null(cls, value):
        # Only runs when title was sent; an explicit null would blank the note
        if value is None:
            raise ValueError("Title is required")
        return value


class AuthorSummary(APIModel):
    id: str
    email: str


class NoteResponse(APIModel):
    """Note response schema."""
    id: str
    title: str
    content: Optional[str]
    tenant_id: str
    author_id: str
    author: AuthorSummary
    created_at: datetime
    updated_at: datetime


class NoteEnvelope(APIModel):
    note: NoteResponse


class NoteListResponse(APIModel):
    """All notes of the tenant, newest first. No pagination."""
    notes: List[NoteResponse]
