from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas.task import Task as TaskSchema, TaskCreate, TaskUpdate
from ..services import task_service
from .auth import get_current_actor
from .projects import _get_update_data

router = APIRouter()


@router.get("/{project_id}/tasks", response_model=List[TaskSchema])
def get_tasks(
    project_id: str,
    actor: Optional[User] = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """Get all tasks of a project."""
    return task_service.list_tasks(db, actor, project_id)


@router.post("/{project_id}/tasks", response_model=TaskSchema, status_code=status.HTTP_201_CREATED)
def create_task(
    project_id: str,
    task: TaskCreate,
    actor: Optional[User] = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """Create a new task in the project."""
    return task_service.create_task(db, actor, project_id, _get_update_data(task))


@router.get("/{project_id}/tasks/{task_id}", response_model=TaskSchema)
def get_task(
    project_id: str,
    task_id: str,
    actor: Optional[User] = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """Get a specific task by ID."""
    return task_service.show_task(db, actor, project_id, task_id)


@router.patch("/{project_id}/tasks/{task_id}", response_model=TaskSchema)
def update_task(
    project_id: str,
    task_id: str,
    task_update: TaskUpdate,
    actor: Optional[User] = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """Rename a task or flip its completed flag."""
    return task_service.update_task(db, actor, project_id, task_id, _get_update_data(task_update))


@router.delete("/{project_id}/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    project_id: str,
    task_id: str,
    actor: Optional[User] = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """Delete a specific task."""
    task_service.destroy_task(db, actor, project_id, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
