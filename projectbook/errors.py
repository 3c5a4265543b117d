"""Domain errors raised by the service layer.

Routers never catch these; the exception handlers in ``projectbook.main``
turn each kind into the matching HTTP response.
"""

from typing import Dict, List, Optional


class ProjectbookError(Exception):
    """Base class for all domain errors."""

    default_message = "Something went wrong."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(ProjectbookError):
    """No actor is signed in."""

    default_message = "You need to sign in or sign up before continuing."


class Unauthorized(ProjectbookError):
    """The actor is signed in but does not own the project."""

    default_message = "You don't have access to that project."


class NotFound(ProjectbookError):
    default_message = "Not found."


class ValidationFailed(ProjectbookError):
    """Attributes broke a field rule; nothing was written."""

    default_message = "Validation failed."

    def __init__(self, errors: Dict[str, List[str]]):
        self.errors = errors
        details = "; ".join(
            f"{field} {message}" for field, messages in errors.items() for message in messages
        )
        super().__init__(f"{self.default_message} {details}".strip())


class OperationFailed(ProjectbookError):
    """The actor was allowed, but the state change was rejected.

    ``redirect_to`` points back at the resource's own view.
    """

    def __init__(self, message: str, redirect_to: str):
        self.redirect_to = redirect_to
        super().__init__(message)
