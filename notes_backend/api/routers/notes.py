import logging

from fastapi import APIRouter, Depends, HTTPException, status

from notes_backend.api.deps import current_user_id, get_notes, note_id_param
from notes_backend.api.schemas import (
    ErrorResponse,
    MessageResponse,
    NoteListResponse,
    NoteMessageResponse,
    NoteOut,
    NoteRequest,
    NoteResponse,
)
from notes_database import NoteStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notes", tags=["Notes"])

NOT_FOUND = {404: {"model": ErrorResponse}, 400: {"model": ErrorResponse}}


def _owned_note_or_404(notes: NoteStore, note_id: int, user_id: int):
    # Someone else's note and a missing note look the same to the caller.
    note = notes.get_owned(note_id, user_id)
    if note is None:
        raise HTTPException(status_code=404, detail="note not found")
    return note


# PUBLIC_INTERFACE
@router.post("", response_model=NoteMessageResponse, status_code=status.HTTP_201_CREATED, summary="Create a new note")
def create_note(
    body: NoteRequest,
    user_id: int = Depends(current_user_id),
    notes: NoteStore = Depends(get_notes),
):
    """
    Create a new note for the authenticated user.
    """
    note = notes.create(user_id, body.title, body.content)
    logger.info("User %s created note %s", user_id, note.id)
    return NoteMessageResponse(message="note created successfully", note=NoteOut.model_validate(note))


# PUBLIC_INTERFACE
@router.get("", response_model=NoteListResponse, summary="List all user notes")
def list_notes(
    user_id: int = Depends(current_user_id),
    notes: NoteStore = Depends(get_notes),
):
    """
    Get all notes for the authenticated user, in storage order.
    """
    return NoteListResponse(notes=[NoteOut.model_validate(n) for n in notes.list_for_user(user_id)])


# PUBLIC_INTERFACE
@router.get("/{id}", response_model=NoteResponse, responses=NOT_FOUND, summary="Get a single note")
def get_note(
    note_id: int = Depends(note_id_param),
    user_id: int = Depends(current_user_id),
    notes: NoteStore = Depends(get_notes),
):
    note = _owned_note_or_404(notes, note_id, user_id)
    return NoteResponse(note=NoteOut.model_validate(note))


# PUBLIC_INTERFACE
@router.put("/{id}", response_model=NoteMessageResponse, responses=NOT_FOUND, summary="Update a note")
def update_note(
    body: NoteRequest,
    note_id: int = Depends(note_id_param),
    user_id: int = Depends(current_user_id),
    notes: NoteStore = Depends(get_notes),
):
    """
    Overwrite the title and content of a note belonging to the authenticated user.
    """
    note = _owned_note_or_404(notes, note_id, user_id)
    note = notes.update(note, body.title, body.content)
    logger.info("User %s updated note %s", user_id, note.id)
    return NoteMessageResponse(message="note updated successfully", note=NoteOut.model_validate(note))


# PUBLIC_INTERFACE
@router.delete("/{id}", response_model=MessageResponse, responses=NOT_FOUND, summary="Delete a note")
def delete_note(
    note_id: int = Depends(note_id_param),
    user_id: int = Depends(current_user_id),
    notes: NoteStore = Depends(get_notes),
):
    """
    Delete a note belonging to the authenticated user.
    """
    note = _owned_note_or_404(notes, note_id, user_id)
    notes.delete(note)
    logger.info("User %s deleted note %s", user_id, note_id)
    return MessageResponse(message="note deleted successfully")
