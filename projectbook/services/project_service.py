"""Project service - ownership-checked project operations.

Every function takes the request session and the acting user (``None`` when
nobody is signed in). Failures are raised as ``projectbook.errors`` types.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..authorization import Action, Identity, ensure_authorized, require_actor
from ..errors import NotFound, OperationFailed, ValidationFailed
from ..models import Project

logger = logging.getLogger(__name__)

COMPLETE_FAILED_MESSAGE = "Unable to complete project."

_EDITABLE_FIELDS = ("name", "description", "due_on")


def project_path(project_id: str) -> str:
    return f"/projects/{project_id}"


def load_project(db: Session, project_id: str, lock: bool = False) -> Project:
    """Fetch a project or raise ``NotFound``.

    ``lock`` takes a row lock so the authorization check and the write that
    follows see the same state.
    """
    query = db.query(Project).filter(Project.id == project_id)
    if lock:
        query = query.with_for_update()
    project = query.first()
    if not project:
        raise NotFound("Project not found")
    return project


def authorized_project(
    db: Session, actor: Optional[Identity], project_id: str, action: Action, lock: bool = False
) -> Project:
    """Load a project and check that ``actor`` may perform ``action`` on it.

    Also used for tasks and notes, which are authorized through their parent.
    """
    require_actor(actor)
    project = load_project(db, project_id, lock=lock)
    ensure_authorized(actor, project, action)
    return project


def _validate(db: Session, owner_id: str, values: dict, project_id: Optional[str] = None) -> None:
    errors: Dict[str, List[str]] = {}

    name = values.get("name")
    if name is None or not str(name).strip():
        errors.setdefault("name", []).append("can't be blank")
    else:
        duplicate = db.query(Project).filter(
            Project.owner_id == owner_id,
            func.lower(Project.name) == name.strip().lower(),
        )
        if project_id is not None:
            duplicate = duplicate.filter(Project.id != project_id)
        if duplicate.first():
            errors.setdefault("name", []).append("has already been taken")

    if errors:
        raise ValidationFailed(errors)


def list_projects(db: Session, actor: Optional[Identity]) -> List[Project]:
    """Projects owned by the actor, oldest first."""
    actor = require_actor(actor)
    return (
        db.query(Project)
        .filter(Project.owner_id == actor.id)
        .order_by(Project.created_at.asc())
        .all()
    )


def show_project(db: Session, actor: Optional[Identity], project_id: str) -> Project:
    return authorized_project(db, actor, project_id, Action.VIEW)


def create_project(db: Session, actor: Optional[Identity], attrs: dict) -> Project:
    actor = require_actor(actor)
    values = {field: attrs.get(field) for field in _EDITABLE_FIELDS}
    _validate(db, actor.id, values)

    values["name"] = values["name"].strip()
    project = Project(owner_id=actor.id, **values)
    db.add(project)
    db.commit()
    db.refresh(project)
    logger.info("User %s created project %s", actor.id, project.id)
    return project


def update_project(db: Session, actor: Optional[Identity], project_id: str, attrs: dict) -> Project:
    """Apply ``attrs`` (only the keys present) after validating the result."""
    project = authorized_project(db, actor, project_id, Action.UPDATE, lock=True)

    changes = {field: value for field, value in attrs.items() if field in _EDITABLE_FIELDS}
    merged = {field: getattr(project, field) for field in _EDITABLE_FIELDS}
    merged.update(changes)
    _validate(db, project.owner_id, merged, project_id=project.id)

    if "name" in changes:
        changes["name"] = changes["name"].strip()
    for field, value in changes.items():
        setattr(project, field, value)
    project.updated_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(project)
    return project


def destroy_project(db: Session, actor: Optional[Identity], project_id: str) -> None:
    """Delete the project together with its tasks and notes."""
    project = authorized_project(db, actor, project_id, Action.DESTROY, lock=True)

    db.delete(project)
    db.commit()
    logger.info("Project %s destroyed", project_id)


def _mark_completed(db: Session, project: Project) -> bool:
    """Persist ``completed = True``. Returns False if the store rejected it.

    The UPDATE only matches a row that is not yet completed, so when two
    requests race past the row lock (SQLite ignores FOR UPDATE) exactly one
    of them writes.
    """
    try:
        written = (
            db.query(Project)
            .filter(
                Project.id == project.id,
                or_(Project.completed.is_(None), Project.completed.is_(False)),
            )
            .update(
                {"completed": True, "updated_at": datetime.now(timezone.utc)},
                synchronize_session=False,
            )
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Could not complete project %s", project.id)
        return False

    if written:
        logger.info("Project %s completed", project.id)
    return True


def complete_project(db: Session, actor: Optional[Identity], project_id: str) -> Project:
    """Move the project to ``completed = True``.

    Completing an already completed project writes nothing. A rejected write
    leaves ``completed`` at its prior value and raises ``OperationFailed``.
    """
    project = authorized_project(db, actor, project_id, Action.COMPLETE, lock=True)

    if project.completed is True:
        db.rollback()
        return project

    if not _mark_completed(db, project):
        raise OperationFailed(COMPLETE_FAILED_MESSAGE, redirect_to=project_path(project_id))

    db.refresh(project)
    return project
