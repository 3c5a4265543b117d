from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas.project import Project as ProjectSchema, ProjectCreate, ProjectDetail, ProjectUpdate
from ..services import project_service
from .auth import get_current_actor

router = APIRouter()


def _get_update_data(payload) -> dict:
    if hasattr(payload, "model_dump"):
        return payload.model_dump(exclude_unset=True)
    return payload.dict(exclude_unset=True)


@router.get("", response_model=List[ProjectSchema])
def get_projects(
    actor: Optional[User] = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """List the signed-in user's projects."""
    return [ProjectSchema.model_validate(project) for project in project_service.list_projects(db, actor)]


@router.post("", response_model=ProjectSchema, status_code=status.HTTP_201_CREATED)
def create_project(
    project: ProjectCreate,
    actor: Optional[User] = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """Create a project owned by the signed-in user."""
    created = project_service.create_project(db, actor, _get_update_data(project))
    return ProjectSchema.model_validate(created)


@router.get("/{project_id}", response_model=ProjectDetail)
def get_project(
    project_id: str,
    actor: Optional[User] = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """Get a project with its tasks and notes."""
    return ProjectDetail.model_validate(project_service.show_project(db, actor, project_id))


@router.patch("/{project_id}", response_model=ProjectSchema)
def update_project(
    project_id: str,
    project_update: ProjectUpdate,
    actor: Optional[User] = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    updated = project_service.update_project(db, actor, project_id, _get_update_data(project_update))
    return ProjectSchema.model_validate(updated)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: str,
    actor: Optional[User] = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """Delete a project along with its tasks and notes."""
    project_service.destroy_project(db, actor, project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{project_id}/complete", response_model=ProjectSchema)
def complete_project(
    project_id: str,
    actor: Optional[User] = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """Mark a project as completed."""
    return ProjectSchema.model_validate(project_service.complete_project(db, actor, project_id))
