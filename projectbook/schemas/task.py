from pydantic import BaseModel
from datetime import datetime
from typing import Optional

class TaskCreate(BaseModel):
    """Schema for creating new tasks."""
    name: Optional[str] = None

class TaskUpdate(BaseModel):
    """Schema for updating existing tasks."""
    name: Optional[str] = None
    completed: Optional[bool] = None

class Task(BaseModel):
    """Complete task schema with all fields."""
    id: str
    name: str
    completed: bool
    project_id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
