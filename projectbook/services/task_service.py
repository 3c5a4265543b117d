"""Task service - tasks are always reached through their project."""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from ..authorization import Action, Identity
from ..errors import NotFound, ValidationFailed
from ..models import Project, Task
from .project_service import authorized_project

logger = logging.getLogger(__name__)


def _load_task(db: Session, project: Project, task_id: str) -> Task:
    task = db.query(Task).filter(Task.id == task_id, Task.project_id == project.id).first()
    if not task:
        raise NotFound("Task not found")
    return task


def _validate_name(name) -> str:
    if name is None or not str(name).strip():
        raise ValidationFailed({"name": ["can't be blank"]})
    return name.strip()


def list_tasks(db: Session, actor: Optional[Identity], project_id: str) -> List[Task]:
    project = authorized_project(db, actor, project_id, Action.VIEW)
    return (
        db.query(Task)
        .filter(Task.project_id == project.id)
        .order_by(Task.created_at.asc())
        .all()
    )


def create_task(db: Session, actor: Optional[Identity], project_id: str, attrs: dict) -> Task:
    project = authorized_project(db, actor, project_id, Action.CREATE_CHILD, lock=True)
    name = _validate_name(attrs.get("name"))

    task = Task(name=name, project_id=project.id)
    db.add(task)
    db.commit()
    db.refresh(task)
    logger.info("Task %s added to project %s", task.id, project.id)
    return task


def show_task(db: Session, actor: Optional[Identity], project_id: str, task_id: str) -> Task:
    project = authorized_project(db, actor, project_id, Action.VIEW)
    return _load_task(db, project, task_id)


def update_task(
    db: Session, actor: Optional[Identity], project_id: str, task_id: str, attrs: dict
) -> Task:
    project = authorized_project(db, actor, project_id, Action.UPDATE, lock=True)
    task = _load_task(db, project, task_id)

    if "name" in attrs:
        task.name = _validate_name(attrs["name"])
    if attrs.get("completed") is not None:
        task.completed = attrs["completed"]
    task.updated_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(task)
    return task


def destroy_task(db: Session, actor: Optional[Identity], project_id: str, task_id: str) -> None:
    project = authorized_project(db, actor, project_id, Action.DESTROY, lock=True)
    task = _load_task(db, project, task_id)

    db.delete(task)
    db.commit()
