import logging
from typing import Optional

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.orm import Session

from .config import CORS_ORIGINS, LANDING_PATH, SIGN_IN_PATH
from .database import create_tables, get_db
from .errors import NotFound, OperationFailed, Unauthenticated, Unauthorized, ValidationFailed
from .logging_config import setup_logging
from .models import User
from .routers import auth, notes, projects, tasks
from .routers.auth import get_current_actor
from .services import project_service

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Projectbook API",
    description="Multi-user project management API with tasks and searchable notes",
    version="1.0.0"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router, prefix="/users", tags=["users"])
app.include_router(projects.router, prefix="/projects", tags=["projects"])
app.include_router(tasks.router, prefix="/projects", tags=["tasks"])
app.include_router(notes.router, prefix="/projects", tags=["notes"])


def wants_json(request: Request) -> bool:
    return "application/json" in request.headers.get("accept", "")


def _redirect(location: str, alert: str) -> RedirectResponse:
    response = RedirectResponse(location, status_code=status.HTTP_302_FOUND)
    response.headers["X-Flash-Alert"] = alert
    return response


@app.exception_handler(Unauthenticated)
async def unauthenticated_handler(request: Request, exc: Unauthenticated):
    if wants_json(request):
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"detail": exc.message},
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _redirect(SIGN_IN_PATH, exc.message)


@app.exception_handler(Unauthorized)
async def unauthorized_handler(request: Request, exc: Unauthorized):
    if wants_json(request):
        return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"detail": exc.message})
    return _redirect(LANDING_PATH, exc.message)


@app.exception_handler(OperationFailed)
async def operation_failed_handler(request: Request, exc: OperationFailed):
    if wants_json(request):
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"detail": exc.message}
        )
    return _redirect(exc.redirect_to, exc.message)


@app.exception_handler(ValidationFailed)
async def validation_failed_handler(request: Request, exc: ValidationFailed):
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"errors": exc.errors}
    )


@app.exception_handler(NotFound)
async def not_found_handler(request: Request, exc: NotFound):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": exc.message})


# Create tables on startup
@app.on_event("startup")
def on_startup():
    setup_logging()
    create_tables()
    logger.info("Projectbook API started")


@app.get("/")
def read_root(
    actor: Optional[User] = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """Landing page; lists the user's projects when signed in."""
    if actor is None:
        return {"message": "Projectbook API", "projects": []}
    return {
        "message": f"Welcome back, {actor.name}",
        "projects": [
            {"id": project.id, "name": project.name, "completed": project.completed}
            for project in project_service.list_projects(db, actor)
        ],
    }


@app.get("/health")
def health_check():
    return {"status": "healthy"}
