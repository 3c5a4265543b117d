"""Outgoing user notifications.

Delivery itself is out of scope here: ``Mailer`` is the hand-off point, and
the default implementation only logs what would be sent.
"""

import logging
from dataclasses import dataclass

from .config import MAIL_FROM
from .models import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WelcomeEmail:
    to: str
    sender: str
    subject: str
    body: str


def welcome_email(user: User) -> WelcomeEmail:
    """Build the message sent once after registration."""
    return WelcomeEmail(
        to=user.email,
        sender=MAIL_FROM,
        subject="Welcome to Projectbook!",
        body=(
            f"Hi {user.first_name},\n\n"
            "Thanks for signing up for Projectbook. "
            "You can start by creating your first project."
        ),
    )


class Mailer:
    def deliver(self, message: WelcomeEmail) -> None:
        logger.info("Delivering %r to %s", message.subject, message.to)


_mailer = Mailer()


def get_mailer() -> Mailer:
    """Dependency returning the configured mailer."""
    return _mailer
