"""Resolve a user's sign-in address into a human-readable location."""

import logging
from typing import Optional, Protocol

from sqlalchemy.orm import Session

from .models import User

logger = logging.getLogger(__name__)


class Geocoder(Protocol):
    def locate(self, ip_address: str) -> Optional[str]:
        """Return e.g. "New York City, New York, US", or None if unknown."""
        ...


class NullGeocoder:
    """Resolves nothing; used when no provider is configured."""

    def locate(self, ip_address: str) -> Optional[str]:
        return None


_geocoder = NullGeocoder()


def get_geocoder() -> Geocoder:
    """Dependency returning the configured geocoder."""
    return _geocoder


def geocode_user(db: Session, user: User, geocoder: Geocoder) -> User:
    """Store the geocoder's answer for ``user.last_sign_in_ip`` as-is.

    Without an address the location stays as it is.
    """
    if not user.last_sign_in_ip:
        return user

    user.location = geocoder.locate(user.last_sign_in_ip)
    db.commit()
    db.refresh(user)
    logger.info("Geocoded user %s to %r", user.id, user.location)
    return user
