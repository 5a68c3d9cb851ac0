"""Tests for visitor identifiers and local storage."""

import re
from unittest.mock import Mock

import pytest
from structlog.testing import capture_logs

from core.storage import (
    BrowserCookieStorage,
    MemoryStorage,
    SessionStateStorage,
    StorageUnavailableError,
)
from core.visitor_identity import (
    VISITOR_ID_KEY,
    VisitorIdentityProvider,
    generate_visitor_id,
    get_or_create_visitor_id,
    is_valid_visitor_id,
)

VISITOR_ID_PATTERN = re.compile(r'^visitor_[0-9a-z]{9}_\d+$')


class BrokenStorage:
    """Storage whose every call fails."""

    def get(self, key):
        raise StorageUnavailableError("storage disabled")

    def set(self, key, value):
        raise StorageUnavailableError("storage disabled")


class TestGenerateVisitorId:
    """Tests for generate_visitor_id."""

    def test_format(self):
        """Ids carry a random base-36 part and a millisecond timestamp."""
        visitor_id = generate_visitor_id(clock=lambda: 1718000000.123)

        assert VISITOR_ID_PATTERN.match(visitor_id)
        assert visitor_id.endswith('_1718000000123')

    def test_random_part_differs(self):
        """Two ids generated at the same instant still differ."""
        ids = {generate_visitor_id(clock=lambda: 1.0) for _ in range(20)}
        assert len(ids) > 1


class TestVisitorIdentityProvider:
    """Tests for get_or_create_visitor_id."""

    def test_same_id_for_every_call(self, local_storage):
        """All calls within one storage lifetime return the same id."""
        provider = VisitorIdentityProvider(local_storage)

        first = provider.get_or_create_visitor_id()
        assert all(provider.get_or_create_visitor_id() == first for _ in range(5))
        assert VisitorIdentityProvider(local_storage).get_or_create_visitor_id() == first

    def test_persists_under_well_known_key(self, local_storage):
        """A new id is written to the siraw_unique_visitor_id key."""
        visitor_id = VisitorIdentityProvider(local_storage).get_or_create_visitor_id()

        assert VISITOR_ID_KEY == 'siraw_unique_visitor_id'
        assert local_storage.get(VISITOR_ID_KEY) == visitor_id

    def test_existing_id_returned_unchanged(self):
        """An id already in storage is returned as-is and not rewritten."""
        storage = Mock()
        storage.get.return_value = 'v1'

        assert VisitorIdentityProvider(storage).get_or_create_visitor_id() == 'v1'
        storage.set.assert_not_called()

    def test_writes_only_on_first_call(self):
        """Storage is written once, on the first call."""
        storage = Mock(wraps=MemoryStorage())
        provider = VisitorIdentityProvider(storage)

        provider.get_or_create_visitor_id()
        provider.get_or_create_visitor_id()

        assert storage.set.call_count == 1

    def test_unavailable_storage_regenerates(self):
        """Broken storage degrades to a fresh id per call instead of failing."""
        provider = VisitorIdentityProvider(BrokenStorage())

        first = provider.get_or_create_visitor_id()
        second = provider.get_or_create_visitor_id()

        assert VISITOR_ID_PATTERN.match(first)
        assert first != second

    def test_unwritable_storage_still_returns_id(self):
        """A failed write still hands back the generated id."""
        storage = Mock()
        storage.get.return_value = None
        storage.set.side_effect = StorageUnavailableError("quota exceeded")

        assert VISITOR_ID_PATTERN.match(VisitorIdentityProvider(storage).get_or_create_visitor_id())

    @pytest.mark.parametrize("stored", ['a/b', '../up', '__name__', 'x' * 200, 'has space'])
    def test_invalid_stored_id_is_replaced(self, stored):
        """An id unusable as a visitor record is regenerated and persisted."""
        storage = MemoryStorage({VISITOR_ID_KEY: stored})

        with capture_logs() as logs:
            visitor_id = VisitorIdentityProvider(storage).get_or_create_visitor_id()

        assert VISITOR_ID_PATTERN.match(visitor_id)
        assert storage.get(VISITOR_ID_KEY) == visitor_id
        assert any(entry['log_level'] == 'warning' for entry in logs)

    @pytest.mark.parametrize("visitor_id,expected", [
        ('visitor_k3j9x0a1b_1718000000000', True),
        ('edge-assigned-123', True),
        ('a/b', False),
        ('__id__', False),
        ('', False),
        (None, False),
    ])
    def test_is_valid_visitor_id(self, visitor_id, expected):
        assert is_valid_visitor_id(visitor_id) is expected

    def test_no_storage(self):
        """Without storage every call gets a throwaway id."""
        assert VISITOR_ID_PATTERN.match(get_or_create_visitor_id(None))


class TestStorageBackends:
    """Tests for the key/value storage implementations."""

    def test_session_state_storage_uses_prefix(self):
        state = {}
        storage = SessionStateStorage(state)

        storage.set(VISITOR_ID_KEY, 'v1')

        assert state == {'kv_siraw_unique_visitor_id': 'v1'}
        assert storage.get(VISITOR_ID_KEY) == 'v1'
        assert storage.get('missing') is None

    def test_session_state_errors_become_unavailable(self):
        state = Mock()
        state.get.side_effect = RuntimeError("no session")

        with pytest.raises(StorageUnavailableError):
            SessionStateStorage(state).get(VISITOR_ID_KEY)

    def test_cookie_wins_over_fallback(self):
        fallback = MemoryStorage({VISITOR_ID_KEY: 'from-session'})
        storage = BrowserCookieStorage({VISITOR_ID_KEY: 'from-cookie'}, fallback)

        assert storage.get(VISITOR_ID_KEY) == 'from-cookie'

    def test_cookie_storage_writes_to_fallback(self):
        fallback = MemoryStorage()
        storage = BrowserCookieStorage({}, fallback)

        visitor_id = VisitorIdentityProvider(storage).get_or_create_visitor_id()

        assert fallback.get(VISITOR_ID_KEY) == visitor_id
        assert storage.get(VISITOR_ID_KEY) == visitor_id

    def test_cookie_storage_writes_back_to_browser(self):
        writer = Mock()
        storage = BrowserCookieStorage({}, MemoryStorage(), writer=writer)

        visitor_id = VisitorIdentityProvider(storage).get_or_create_visitor_id()

        writer.assert_called_once_with(VISITOR_ID_KEY, visitor_id)

    def test_known_cookie_is_not_rewritten(self):
        writer = Mock()
        storage = BrowserCookieStorage({VISITOR_ID_KEY: 'v1'}, MemoryStorage(), writer=writer)

        assert VisitorIdentityProvider(storage).get_or_create_visitor_id() == 'v1'
        writer.assert_not_called()

    def test_writer_failure_becomes_unavailable(self):
        """The id is still kept for the session when the browser write fails."""
        fallback = MemoryStorage()
        storage = BrowserCookieStorage({}, fallback, writer=Mock(side_effect=RuntimeError("no script run")))

        with pytest.raises(StorageUnavailableError):
            storage.set(VISITOR_ID_KEY, 'v1')
        assert fallback.get(VISITOR_ID_KEY) == 'v1'
