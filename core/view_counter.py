"""
Siraw Links - View Counter
===========================
Counts each visitor once: a visitor record marks the id as seen, and
the global counter is bumped when the record is first created.

The default path reads the counter and writes ``count + 1`` in two
separate calls. Two first loads racing from the same visitor
(duplicate tabs) can both increment. Pass
``atomic=True`` to use the store's transactional increment instead.
"""

from datetime import datetime, timezone
from typing import Callable, MutableMapping, Optional

import structlog

from .document_store import DocumentStore
from .paths import DocumentPaths
from .visitor_identity import VisitorIdentityProvider

logger = structlog.get_logger()


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class ViewCounter:
    """Runs the unique-visitor counting protocol against a document store."""

    def __init__(
        self,
        store: DocumentStore,
        identity: VisitorIdentityProvider,
        paths: Optional[DocumentPaths] = None,
        user_agent: str = "",
        atomic: bool = False,
        now: Callable[[], str] = utc_now_iso,
    ):
        self.store = store
        self.identity = identity
        self.paths = paths or DocumentPaths()
        self.user_agent = user_agent or ""
        self.atomic = atomic
        self._now = now

    def track_page_view(self) -> bool:
        """
        Record this page view.

        Returns:
            True if a new visitor was counted, False if the visitor was
            already known or a store call failed
        """
        visitor_id = self.identity.get_or_create_visitor_id()

        try:
            visitor_path = self.paths.visitor(visitor_id)
            visitor_snap = self.store.get(visitor_path)
            if visitor_snap.exists:
                logger.debug("Visitor already counted", visitor_id=visitor_id)
                return False

            timestamp = self._now()
            new_count = self._increment_counter(timestamp)

            self.store.set(visitor_path, {
                'firstVisit': timestamp,
                'userAgent': self.user_agent,
            })
        except Exception as e:
            logger.error("Error tracking view", visitor_id=visitor_id, error=str(e))
            return False

        logger.info("Counted new visitor", visitor_id=visitor_id, count=new_count)
        return True

    def _increment_counter(self, timestamp: str) -> int:
        counter_path = self.paths.counter

        if self.atomic:
            return self.store.increment(counter_path, 'count', 1, extra={'lastUpdate': timestamp})

        counter_snap = self.store.get(counter_path)
        current = counter_snap.get('count', 0) or 0
        new_count = int(current) + 1
        self.store.set(counter_path, {
            'count': new_count,
            'lastUpdate': timestamp,
        }, merge=True)
        return new_count


def run_once_per_session(counter: ViewCounter, state: MutableMapping, key: str = 'view_tracked') -> bool:
    """
    Run ``counter.track_page_view()`` the first time only for this session.

    Streamlit reruns the script on every interaction; the page view is
    one load, not one rerun.

    Returns:
        True if this call counted a new visitor
    """
    if state.get(key):
        return False
    state[key] = True
    return counter.track_page_view()
