"""
Siraw Links - Configuration Module
===================================
Settings read from environment variables, with Streamlit secrets
taking precedence when the app runs on Streamlit Cloud.
"""

import os
from typing import Any, Mapping, Optional


TRUE_VALUES = ('1', 'true', 'yes', 'on')


def _secret(name: str) -> Optional[Any]:
    """Look up a top-level Streamlit secret, None if secrets aren't configured."""
    try:
        import streamlit as st
        if name in st.secrets:
            return st.secrets[name]
    except Exception:
        # No secrets.toml (local runs, tests)
        return None
    return None


class Settings:
    """Application settings, read dynamically on every access."""

    def __init__(self, overrides: Optional[Mapping[str, Any]] = None):
        self._overrides = dict(overrides or {})

    def _get(self, name: str, default: Any = None) -> Any:
        if name in self._overrides:
            return self._overrides[name]
        value = _secret(name)
        if value is not None:
            return value
        return os.getenv(name, default)

    @property
    def app_id(self) -> str:
        return str(self._get('SIRAW_APP_ID', 'default-app-id'))

    @property
    def store_backend(self) -> str:
        return str(self._get('SIRAW_STORE_BACKEND', 'memory')).strip().lower()

    @property
    def firebase_project(self) -> Optional[str]:
        return self._get('SIRAW_FIREBASE_PROJECT') or self._get('GOOGLE_CLOUD_PROJECT') or None

    @property
    def credentials_file(self) -> Optional[str]:
        return self._get('GOOGLE_APPLICATION_CREDENTIALS') or None

    @property
    def atomic_counter(self) -> bool:
        value = self._get('SIRAW_ATOMIC_COUNTER', 'false')
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in TRUE_VALUES

    @property
    def log_level(self) -> str:
        return str(self._get('SIRAW_LOG_LEVEL', 'INFO')).upper()

    @property
    def refresh_seconds(self) -> float:
        try:
            return float(self._get('SIRAW_REFRESH_SECONDS', 0.5))
        except (TypeError, ValueError):
            return 0.5


_settings_instance = None


def get_settings() -> Settings:
    """Return the shared Settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def clear_settings_cache():
    """Drop the shared Settings instance (tests)."""
    global _settings_instance
    _settings_instance = None
