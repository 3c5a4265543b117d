"""Note service - project-scoped notes and note search."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from .. import search
from ..authorization import Action, Identity
from ..errors import NotFound, ValidationFailed
from ..models import Note, Project
from .project_service import authorized_project

logger = logging.getLogger(__name__)


def _load_note(db: Session, project: Project, note_id: str) -> Note:
    note = db.query(Note).filter(Note.id == note_id, Note.project_id == project.id).first()
    if not note:
        raise NotFound("Note not found")
    return note


def list_notes(
    db: Session, actor: Optional[Identity], project_id: str, term: Optional[str] = None
) -> List[Note]:
    """All notes of the project, or only those matching ``term`` when given."""
    if term is not None:
        return search_notes(db, actor, project_id, term)

    project = authorized_project(db, actor, project_id, Action.VIEW)
    return (
        db.query(Note)
        .filter(Note.project_id == project.id)
        .order_by(Note.created_at.asc(), Note.id.asc())
        .all()
    )


def search_notes(db: Session, actor: Optional[Identity], project_id: str, term: str) -> List[Note]:
    project = authorized_project(db, actor, project_id, Action.VIEW)
    return search.search(db, project, term)


def create_note(db: Session, actor: Optional[Identity], project_id: str, attrs: dict) -> Note:
    """Add a note to the project, authored by the actor."""
    project = authorized_project(db, actor, project_id, Action.CREATE_CHILD, lock=True)

    message = attrs.get("message")
    if message is None or not str(message).strip():
        raise ValidationFailed({"message": ["can't be blank"]})

    note = Note(message=message, project_id=project.id, user_id=actor.id)
    db.add(note)
    db.commit()
    db.refresh(note)
    logger.info("Note %s added to project %s", note.id, project.id)
    return note


def show_note(db: Session, actor: Optional[Identity], project_id: str, note_id: str) -> Note:
    project = authorized_project(db, actor, project_id, Action.VIEW)
    return _load_note(db, project, note_id)


def destroy_note(db: Session, actor: Optional[Identity], project_id: str, note_id: str) -> None:
    project = authorized_project(db, actor, project_id, Action.DESTROY, lock=True)
    note = _load_note(db, project, note_id)

    db.delete(note)
    db.commit()
