"""
Note Endpoints

CRUD over the caller's tenant notes. The tenant always comes from the
verified token (get_identity), never from the URL or body.
"""
from fastapi import APIRouter, Depends, status

from notesapp.api.deps import get_identity, get_note_repository
from notesapp.core.context import IdentityContext
from notesapp.schemas.base import MessageResponse
from notesapp.schemas.note import (
    NoteCreate,
    NoteEnvelope,
    NoteListResponse,
    NoteResponse,
    NoteUpdate,
)
from notesapp.services.notes import NoteRepository

router = APIRouter(prefix="/notes", tags=["notes"])


def _envelope(note) -> NoteEnvelope:
    return NoteEnvelope(note=NoteResponse.model_validate(note))


@router.get("", response_model=NoteListResponse)
def list_notes(
    ctx: IdentityContext = Depends(get_identity),
    repo: NoteRepository = Depends(get_note_repository),
):
    """List all notes of the caller's tenant, newest first."""
    notes = repo.list(ctx)
    return NoteListResponse(notes=[NoteResponse.model_validate(n) for n in notes])


@router.post("", response_model=NoteEnvelope, status_code=status.HTTP_201_CREATED)
def create_note(
    note_data: NoteCreate,
    ctx: IdentityContext = Depends(get_identity),
    repo: NoteRepository = Depends(get_note_repository),
):
    """
    Create a note.

    Free-plan tenants are limited to 3 notes (403 once reached).
    """
    note = repo.create(ctx, title=note_data.title, content=note_data.content)
    return _envelope(note)


@router.get("/{note_id}", response_model=NoteEnvelope)
def get_note(
    note_id: str,
    ctx: IdentityContext = Depends(get_identity),
    repo: NoteRepository = Depends(get_note_repository),
):
    return _envelope(repo.get(ctx, note_id))


@router.put("/{note_id}", response_model=NoteEnvelope)
def update_note(
    note_id: str,
    note_data: NoteUpdate,
    ctx: IdentityContext = Depends(get_identity),
    repo: NoteRepository = Depends(get_note_repository),
):
    """Partial update: fields left out of the body keep their value."""
    changes = note_data.model_dump(exclude_unset=True)
    return _envelope(repo.update(ctx, note_id, changes))


@router.delete("/{note_id}", response_model=MessageResponse)
def delete_note(
    note_id: str,
    ctx: IdentityContext = Depends(get_identity),
    repo: NoteRepository = Depends(get_note_repository),
):
    repo.delete(ctx, note_id)
    return MessageResponse(message="Note deleted successfully")
