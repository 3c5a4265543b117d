from sqlmodel import SQLModel, Field, Relationship
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

class Task(SQLModel, table=True):
    """Task model. Always nested under a project."""
    __tablename__ = "tasks"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    name: str
    completed: bool = Field(default=False)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    project_id: str = Field(foreign_key="projects.id", index=True)

    # Relationship back to the owning project
    project: Optional["Project"] = Relationship(back_populates="tasks")
