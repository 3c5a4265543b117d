from pydantic import BaseModel
from datetime import date, datetime
from typing import List, Optional

from .note import Note
from .task import Task

class ProjectCreate(BaseModel):
    """Schema for creating projects.

    ``completed`` is deliberately absent: it only changes through the
    complete endpoint.
    """
    name: Optional[str] = None
    description: Optional[str] = None
    due_on: Optional[date] = None

class ProjectUpdate(ProjectCreate):
    """Schema for updating projects. Only fields that are sent are applied."""
    pass

class Project(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    due_on: Optional[date] = None
    completed: Optional[bool] = None
    late: bool
    owner_id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class ProjectDetail(Project):
    """Project with its nested tasks and notes."""
    tasks: List[Task] = []
    notes: List[Note] = []
