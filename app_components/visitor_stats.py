"""
Siraw Links - Visitor Stats Component
======================================
Unique-visitor counting and the live eye counter badge.
"""

import streamlit as st
from typing import Optional

from core.config import Settings
from core.live_counter import LiveViewCount
from core.paths import DocumentPaths
from core.session import StoreSession
from core.storage import BrowserCookieStorage, KeyValueStorage, SessionStateStorage
from core.view_counter import ViewCounter, run_once_per_session
from core.visitor_identity import VisitorIdentityProvider

from .browser_cookie import set_browser_cookie


def _request_cookies() -> dict:
    try:
        return dict(st.context.cookies)
    except Exception:
        return {}


def _user_agent() -> str:
    try:
        return st.context.headers.get('User-Agent', '') or ''
    except Exception:
        return ''


class VisitorStatsComponent:
    """Counts the visitor once and shows the live view count."""

    def __init__(self, session: StoreSession, settings: Settings, session_prefix: str = ""):
        """Initialize visitor stats."""
        self.session = session
        self.settings = settings
        self.paths = DocumentPaths(settings.app_id)
        self.live_key = f"{session_prefix}live_view_count"
        self.tracked_key = f"{session_prefix}view_tracked"

    def visitor_storage(self) -> KeyValueStorage:
        """Visitor id storage: request cookie, then session state; new ids go back as a cookie."""
        return BrowserCookieStorage(
            _request_cookies(),
            SessionStateStorage(st.session_state),
            writer=set_browser_cookie,
        )

    def count_visitor(self) -> bool:
        """Count this visitor if not already counted."""
        if not self.session.ready:
            return False
        counter = ViewCounter(
            self.session.store,
            VisitorIdentityProvider(self.visitor_storage()),
            paths=self.paths,
            user_agent=_user_agent(),
            atomic=self.settings.atomic_counter,
        )
        return run_once_per_session(counter, st.session_state, key=self.tracked_key)

    def live_count(self) -> Optional[LiveViewCount]:
        """This session's live count, subscribed on first use."""
        if not self.session.ready:
            return None
        live = st.session_state.get(self.live_key)
        if live is None:
            live = LiveViewCount(self.session.store, self.paths.counter)
            st.session_state[self.live_key] = live
        live.start()
        return live

    def teardown(self):
        """Stop the live subscription when the counter is no longer shown."""
        live = st.session_state.pop(self.live_key, None)
        if live is not None:
            live.stop()

    def render_badge(self):
        """Render the eye counter, refreshed on a timer."""
        self.count_visitor()
        live = self.live_count()

        @st.fragment(run_every=self.settings.refresh_seconds)
        def _badge():
            count = live.count if live is not None else 0
            pulse_class = " pulse" if live is not None and live.is_pulsing else ""
            st.markdown(
                f'<div class="view-badge"><span class="view-eye">👁️</span>'
                f'<span class="view-count{pulse_class}" id="viewCount">{count:,}</span></div>',
                unsafe_allow_html=True
            )

        _badge()
