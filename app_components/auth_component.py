"""
Siraw Links - Store Session Component
======================================
Establishes the document store session once per browser session.
"""

import streamlit as st

from core.config import Settings
from core.document_store import MemoryDocumentStore
from core.paths import DocumentPaths
from core.session import StoreSession, establish_session


class AuthComponent:
    """Session precondition for the view counter."""

    def __init__(self, settings: Settings, memory_store: MemoryDocumentStore = None, session_prefix: str = ""):
        """Initialize auth component."""
        self.settings = settings
        self.memory_store = memory_store
        self.session_key = f"{session_prefix}store_session"

    def _secrets(self):
        try:
            if hasattr(st, 'secrets'):
                return st.secrets.to_dict()
        except Exception:
            # No secrets.toml
            return None
        return None

    def ensure_session(self) -> StoreSession:
        """
        Return this browser session's StoreSession, establishing it once.

        Returns:
            StoreSession, possibly not ready
        """
        session = st.session_state.get(self.session_key)
        if session is None:
            session = establish_session(
                self.settings,
                secrets=self._secrets(),
                memory_store=self.memory_store,
                probe_path=DocumentPaths(self.settings.app_id).counter,
            )
            st.session_state[self.session_key] = session
        return session

    def render(self) -> StoreSession:
        """
        Establish the session and show a quiet caption if it failed.

        Returns:
            StoreSession
        """
        session = self.ensure_session()
        if not session.ready:
            st.sidebar.caption("👁️ View counter offline")
        return session
