from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request, Response, status
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from ..config import ACCESS_TOKEN_EXPIRE_MINUTES, SECRET_KEY
from ..database import get_db, get_session
from ..errors import Unauthenticated
from ..geocoding import Geocoder, geocode_user, get_geocoder
from ..models import User
from ..notifications import Mailer, get_mailer, welcome_email
from ..schemas.user import AuthResponse, TokenData, User as UserSchema, UserCreate, UserSignIn
from ..services import user_service

router = APIRouter()

ALGORITHM = "HS256"


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def _get_token_from_request(request: Request) -> Optional[str]:
    auth_header = request.headers.get("Authorization", "")
    if auth_header.lower().startswith("bearer "):
        return auth_header.split(" ", 1)[1].strip()
    return request.cookies.get("token")


def _decode_token(token: str) -> Optional[TokenData]:
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        email: str = payload.get("sub")
        if not email:
            return None
        return TokenData(email=email)
    except JWTError:
        return None


def _set_token_cookie(response: Response, access_token: str) -> None:
    response.set_cookie(
        key="token",
        value=access_token,
        httponly=True,
        secure=False,  # Set to True in production with HTTPS
        samesite="lax",
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


async def get_current_actor(
    request: Request,
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Resolve the signed-in user, or None when the request is anonymous.

    Services decide what an absent actor means for each operation.
    """
    token = _get_token_from_request(request)
    if not token:
        return None

    token_data = _decode_token(token)
    if not token_data or not token_data.email:
        return None

    return user_service.find_by_email(db, token_data.email)


async def get_current_user(
    actor: Optional[User] = Depends(get_current_actor),
) -> User:
    """Get current user from JWT token, rejecting anonymous requests."""
    if actor is None:
        raise Unauthenticated()
    return actor


def _geocode_in_background(user_id: str, geocoder: Geocoder) -> None:
    with get_session() as session:
        user = session.get(User, user_id)
        if user is not None:
            geocode_user(session, user, geocoder)


@router.post("", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def sign_up(
    user: UserCreate,
    response: Response,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    """Create a new user account and queue the welcome email."""
    def _queue_welcome_email(created: User) -> None:
        background_tasks.add_task(mailer.deliver, welcome_email(created))

    db_user = user_service.register_user(
        db, user.model_dump(), on_created=_queue_welcome_email
    )

    access_token = create_access_token(data={"sub": db_user.email})
    _set_token_cookie(response, access_token)

    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user": UserSchema.model_validate(db_user),
    }


@router.get("/sign_in")
def sign_in_page():
    """Where anonymous browser requests are redirected."""
    return {"message": "Sign in by POSTing your email and password to /users/sign_in."}


@router.post("/sign_in", response_model=AuthResponse)
def sign_in(
    credentials: UserSignIn,
    request: Request,
    response: Response,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    geocoder: Geocoder = Depends(get_geocoder),
):
    """Sign in and get JWT token."""
    db_user = user_service.authenticate_user(db, credentials.email, credentials.password)
    if not db_user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )

    client_ip = request.client.host if request.client else None
    user_service.record_sign_in(db, db_user, client_ip)
    background_tasks.add_task(_geocode_in_background, db_user.id, geocoder)

    access_token = create_access_token(data={"sub": db_user.email})
    _set_token_cookie(response, access_token)

    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user": UserSchema.model_validate(db_user),
    }


@router.delete("/sign_out")
async def sign_out(response: Response):
    """Sign out and clear session cookie."""
    response.delete_cookie(key="token")
    return {"success": True}


@router.get("/me", response_model=UserSchema)
def read_users_me(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return UserSchema.model_validate(current_user)
