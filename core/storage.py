"""
Siraw Links - Local Key/Value Storage
======================================
Small get/set string capability standing in for the browser's
origin-scoped localStorage.
"""

from typing import Callable, Dict, Mapping, MutableMapping, Optional


class StorageUnavailableError(Exception):
    """Raised when the local storage backend cannot be read or written."""


class KeyValueStorage:
    """Interface for a synchronous string key/value store."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError


class MemoryStorage(KeyValueStorage):
    """Dict-backed storage for tests and local runs."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class SessionStateStorage(KeyValueStorage):
    """
    Storage backed by a mutable mapping such as ``st.session_state``.

    Values live as long as the browser session does.
    """

    def __init__(self, state: MutableMapping, prefix: str = "kv_"):
        self._state = state
        self._prefix = prefix

    def get(self, key: str) -> Optional[str]:
        try:
            return self._state.get(self._prefix + key)
        except Exception as e:
            raise StorageUnavailableError(str(e)) from e

    def set(self, key: str, value: str) -> None:
        try:
            self._state[self._prefix + key] = value
        except Exception as e:
            raise StorageUnavailableError(str(e)) from e


class BrowserCookieStorage(KeyValueStorage):
    """
    Reads keys from request cookies, writes to a fallback storage and
    back to the browser.

    Streamlit exposes cookies read-only (``st.context.cookies``), so new
    values are kept in ``fallback`` for the rest of this session and
    handed to ``writer``, which sets the cookie for later page loads.
    """

    def __init__(
        self,
        cookies: Mapping[str, str],
        fallback: KeyValueStorage,
        writer: Optional[Callable[[str, str], None]] = None,
    ):
        self._cookies = dict(cookies or {})
        self._fallback = fallback
        self._writer = writer

    def get(self, key: str) -> Optional[str]:
        value = self._cookies.get(key)
        if value:
            return value
        return self._fallback.get(key)

    def set(self, key: str, value: str) -> None:
        self._fallback.set(key, value)
        self._cookies[key] = value
        if self._writer is not None:
            try:
                self._writer(key, value)
            except Exception as e:
                raise StorageUnavailableError(f"Cookie write failed: {e}") from e
