from pydantic import BaseModel
from typing import Optional
from datetime import datetime

class UserBase(BaseModel):
    email: str

class UserCreate(BaseModel):
    """Registration payload. Presence is checked by the user service so that
    missing fields come back as field errors rather than a schema error."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

class UserSignIn(BaseModel):
    email: str
    password: str

class User(UserBase):
    id: str
    first_name: str
    last_name: str
    name: str
    location: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class TokenData(BaseModel):
    email: Optional[str] = None

class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: User
