"""User registration and sign-in bookkeeping."""

import logging
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

import bcrypt
from sqlalchemy import func
from sqlalchemy.orm import Session

from ..config import PASSWORD_MIN_LENGTH
from ..errors import ValidationFailed
from ..models import User

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("first_name", "last_name", "email", "password")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    password_bytes = plain_password.encode('utf-8')[:72]
    hashed_bytes = hashed_password.encode('utf-8') if isinstance(hashed_password, str) else hashed_password
    return bcrypt.checkpw(password_bytes, hashed_bytes)


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt directly."""
    password_bytes = password.encode('utf-8')[:72]  # Truncate to 72 bytes (bcrypt limit)
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode('utf-8')


def normalize_email(email: str) -> str:
    return email.strip().lower()


def find_by_email(db: Session, email: str) -> Optional[User]:
    """Case-insensitive lookup."""
    return db.query(User).filter(func.lower(User.email) == normalize_email(email)).first()


def validate_user(db: Session, attrs: dict) -> Dict[str, List[str]]:
    errors: Dict[str, List[str]] = {}

    for field in _REQUIRED_FIELDS:
        value = attrs.get(field)
        if value is None or not str(value).strip():
            errors.setdefault(field, []).append("can't be blank")

    email = attrs.get("email")
    if "email" not in errors and find_by_email(db, email):
        errors.setdefault("email", []).append("has already been taken")

    password = attrs.get("password")
    if "password" not in errors and len(password) < PASSWORD_MIN_LENGTH:
        errors.setdefault("password", []).append(
            f"is too short (minimum is {PASSWORD_MIN_LENGTH} characters)"
        )

    return errors


def register_user(
    db: Session, attrs: dict, on_created: Optional[Callable[[User], None]] = None
) -> User:
    """Create a user and fire ``on_created`` once the row is committed.

    ``on_created`` is where the welcome email gets scheduled; it is not
    awaited and its outcome does not affect registration.
    """
    errors = validate_user(db, attrs)
    if errors:
        raise ValidationFailed(errors)

    user = User(
        first_name=attrs["first_name"].strip(),
        last_name=attrs["last_name"].strip(),
        email=normalize_email(attrs["email"]),
        hashed_password=get_password_hash(attrs["password"]),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s", user.id)

    if on_created is not None:
        on_created(user)
    return user


def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
    """Authenticate a user."""
    user = find_by_email(db, email)
    if not user:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def record_sign_in(db: Session, user: User, ip_address: Optional[str]) -> User:
    user.sign_in_count += 1
    user.last_sign_in_ip = ip_address
    user.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)
    return user
