"""Ownership policy for projects and everything nested under them.

``authorize`` is the only place an actor is compared with a project owner.
Tasks and notes have no owner of their own, so callers pass the parent
project.
"""

import enum
import logging
from typing import Optional, Protocol

from .errors import Unauthenticated, Unauthorized
from .models import Project

logger = logging.getLogger(__name__)


class Identity(Protocol):
    """An authenticated actor. Only its id takes part in ownership checks."""

    id: str


class Action(str, enum.Enum):
    VIEW = "view"
    CREATE_CHILD = "create_child"
    UPDATE = "update"
    COMPLETE = "complete"
    DESTROY = "destroy"


class Decision(str, enum.Enum):
    ALLOW = "allow"
    DENY = "deny"


def authorize(actor: Optional[Identity], project: Project, action: Action) -> Decision:
    """Decide whether ``actor`` may perform ``action`` on ``project``."""
    if actor is None:
        return Decision.DENY
    if actor.id != project.owner_id:
        return Decision.DENY
    return Decision.ALLOW


def require_actor(actor: Optional[Identity]) -> Identity:
    if actor is None:
        raise Unauthenticated()
    return actor


def ensure_authorized(actor: Optional[Identity], project: Project, action: Action) -> None:
    """Raise the matching domain error when ``authorize`` denies."""
    if authorize(actor, project, action) is Decision.ALLOW:
        return

    if actor is None:
        raise Unauthenticated()

    logger.info(
        "Denied %s on project %s for user %s", action.value, project.id, actor.id
    )
    raise Unauthorized()
