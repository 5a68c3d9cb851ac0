"""
Siraw Links - Visitor Identity
===============================
Stable per-browser visitor identifiers, created lazily on first use.
"""

import random
import re
import string
import time
from typing import Callable, Optional

import structlog

from .storage import KeyValueStorage, StorageUnavailableError

logger = structlog.get_logger()

VISITOR_ID_KEY = 'siraw_unique_visitor_id'

_BASE36 = string.digits + string.ascii_lowercase

# Usable as a single document id: no slashes, no reserved __name__ form
_VALID_ID = re.compile(r'^[A-Za-z0-9_-]{1,128}$')


def is_valid_visitor_id(visitor_id) -> bool:
    """True if ``visitor_id`` can name a visitor record."""
    if not isinstance(visitor_id, str) or not _VALID_ID.match(visitor_id):
        return False
    return not (visitor_id.startswith('__') and visitor_id.endswith('__'))


def generate_visitor_id(clock: Callable[[], float] = time.time, rng=random) -> str:
    """
    Build a new identifier from a random part and the current time.

    Unique enough to tell visitors apart; not suitable as a secret.

    Returns:
        String like ``visitor_k3j9x0a1b_1718000000000``
    """
    random_part = ''.join(rng.choice(_BASE36) for _ in range(9))
    return f"visitor_{random_part}_{int(clock() * 1000)}"


class VisitorIdentityProvider:
    """Hands out the visitor id persisted in local storage."""

    def __init__(
        self,
        storage: Optional[KeyValueStorage],
        key: str = VISITOR_ID_KEY,
        clock: Callable[[], float] = time.time,
        rng=random,
    ):
        self.storage = storage
        self.key = key
        self._clock = clock
        self._rng = rng

    def get_or_create_visitor_id(self) -> str:
        """
        Return the stored visitor id, creating and persisting one if absent.

        When storage is unavailable a fresh id is returned on every call,
        so the visitor may be counted more than once.
        """
        if self.storage is None:
            logger.warning("Visitor storage not configured, using a throwaway id")
            return generate_visitor_id(self._clock, self._rng)

        try:
            visitor_id = self.storage.get(self.key)
        except StorageUnavailableError as e:
            logger.warning("Visitor storage unreadable, using a throwaway id", error=str(e))
            return generate_visitor_id(self._clock, self._rng)

        if visitor_id and is_valid_visitor_id(visitor_id):
            return visitor_id
        if visitor_id:
            logger.warning("Replacing invalid stored visitor id", visitor_id=str(visitor_id)[:64])

        visitor_id = generate_visitor_id(self._clock, self._rng)
        try:
            self.storage.set(self.key, visitor_id)
        except StorageUnavailableError as e:
            logger.warning("Could not persist visitor id", visitor_id=visitor_id, error=str(e))
        else:
            logger.info("Created visitor id", visitor_id=visitor_id)
        return visitor_id


def get_or_create_visitor_id(storage: Optional[KeyValueStorage]) -> str:
    """Shortcut for ``VisitorIdentityProvider(storage).get_or_create_visitor_id()``."""
    return VisitorIdentityProvider(storage).get_or_create_visitor_id()
