"""Free-text search over a project's notes.

Matching is a case-insensitive substring test against ``Note.message``.
"""

from typing import List

from sqlalchemy import String, func
from sqlalchemy.orm import Session

from .models import Note, Project


def search(db: Session, project: Project, term: str) -> List[Note]:
    """Return the notes of ``project`` whose message contains ``term``.

    A blank term matches nothing. Results follow creation order.
    """
    if term is None or not term.strip():
        return []

    return (
        db.query(Note)
        .filter(
            Note.project_id == project.id,
            func.lower(Note.message, type_=String).contains(term.lower(), autoescape=True),
        )
        .order_by(Note.created_at.asc(), Note.id.asc())
        .all()
    )
