from sqlmodel import SQLModel, Field, Relationship
from datetime import date, datetime, timezone
from typing import Optional, List
from uuid import uuid4

class Project(SQLModel, table=True):
    """Project model. Owned by exactly one user; owns its tasks and notes."""
    __tablename__ = "projects"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    name: str = Field(index=True)
    description: Optional[str] = None
    due_on: Optional[date] = None
    # None until the project is explicitly completed
    completed: Optional[bool] = Field(default=None)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    owner_id: str = Field(foreign_key="users.id", index=True)

    owner: Optional["User"] = Relationship(back_populates="projects")
    tasks: List["Task"] = Relationship(
        back_populates="project",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "Task.created_at"},
    )
    notes: List["Note"] = Relationship(
        back_populates="project",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "Note.created_at"},
    )

    @property
    def late(self) -> bool:
        return self.due_on is not None and self.due_on < date.today()
