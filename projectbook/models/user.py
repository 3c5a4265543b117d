from sqlmodel import SQLModel, Field, Relationship
from datetime import datetime, timezone
from typing import Optional, List
from uuid import uuid4

class User(SQLModel, table=True):
    """User model for authentication and project ownership."""
    __tablename__ = "users"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    first_name: str
    last_name: str
    email: str = Field(unique=True, index=True)
    hashed_password: str
    sign_in_count: int = Field(default=0)
    last_sign_in_ip: Optional[str] = None
    location: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Projects this user owns, and notes this user authored
    projects: List["Project"] = Relationship(back_populates="owner")
    notes: List["Note"] = Relationship(back_populates="user")

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}"
