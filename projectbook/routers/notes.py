from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas.note import Note as NoteSchema, NoteCreate
from ..services import note_service
from .auth import get_current_actor
from .projects import _get_update_data

router = APIRouter()


@router.get("/{project_id}/notes", response_model=List[NoteSchema])
def get_notes(
    project_id: str,
    term: Optional[str] = None,
    actor: Optional[User] = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """List a project's notes, or search them when ``term`` is given."""
    return note_service.list_notes(db, actor, project_id, term)


@router.post("/{project_id}/notes", response_model=NoteSchema, status_code=status.HTTP_201_CREATED)
def create_note(
    project_id: str,
    note: NoteCreate,
    actor: Optional[User] = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return note_service.create_note(db, actor, project_id, _get_update_data(note))


@router.get("/{project_id}/notes/{note_id}", response_model=NoteSchema)
def get_note(
    project_id: str,
    note_id: str,
    actor: Optional[User] = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return note_service.show_note(db, actor, project_id, note_id)


@router.delete("/{project_id}/notes/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_note(
    project_id: str,
    note_id: str,
    actor: Optional[User] = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    note_service.destroy_note(db, actor, project_id, note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
