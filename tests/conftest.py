"""Pytest configuration and shared fixtures."""

import pytest

from core.config import Settings, clear_settings_cache
from core.document_store import MemoryDocumentStore
from core.paths import DocumentPaths
from core.storage import MemoryStorage
from core.visitor_identity import VISITOR_ID_KEY, VisitorIdentityProvider


class FakeTimer:
    """Stands in for threading.Timer; fires only when told to."""

    created = []

    def __init__(self, interval, function, args=None, kwargs=None):
        self.interval = interval
        self.function = function
        self.args = args or ()
        self.kwargs = kwargs or {}
        self.started = False
        self.cancelled = False
        FakeTimer.created.append(self)

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if not self.cancelled:
            self.function(*self.args, **self.kwargs)


@pytest.fixture(autouse=True)
def _reset_state():
    clear_settings_cache()
    FakeTimer.created = []
    yield
    clear_settings_cache()


@pytest.fixture
def paths():
    return DocumentPaths('test-app')


@pytest.fixture
def memory_store():
    return MemoryDocumentStore()


@pytest.fixture
def local_storage():
    return MemoryStorage()


@pytest.fixture
def identity_for():
    """Factory: identity provider whose storage already holds ``visitor_id``."""
    def _make(visitor_id):
        return VisitorIdentityProvider(MemoryStorage({VISITOR_ID_KEY: visitor_id}))
    return _make


@pytest.fixture
def settings():
    return Settings({'SIRAW_APP_ID': 'test-app', 'SIRAW_STORE_BACKEND': 'memory'})


@pytest.fixture
def fake_timer():
    return FakeTimer
