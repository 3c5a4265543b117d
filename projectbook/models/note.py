from sqlmodel import SQLModel, Field, Relationship
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

class Note(SQLModel, table=True):
    """Note model. Belongs to a project and records its author."""
    __tablename__ = "notes"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    message: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    project_id: str = Field(foreign_key="projects.id", index=True)
    user_id: str = Field(foreign_key="users.id", index=True)

    project: Optional["Project"] = Relationship(back_populates="notes")
    user: Optional["User"] = Relationship(back_populates="notes")
