"""
Siraw Links - Core Module
==========================
Visitor identity, unique-visitor counting and the live view count.
"""

from .config import Settings, get_settings, clear_settings_cache

from .storage import (
    KeyValueStorage,
    MemoryStorage,
    SessionStateStorage,
    BrowserCookieStorage,
    StorageUnavailableError,
)

from .visitor_identity import (
    VISITOR_ID_KEY,
    VisitorIdentityProvider,
    generate_visitor_id,
    get_or_create_visitor_id,
    is_valid_visitor_id,
)

from .document_store import (
    DocumentSnapshot,
    DocumentStore,
    FirestoreDocumentStore,
    MemoryDocumentStore,
    StoreError,
    Subscription,
)

from .paths import DocumentPaths
from .session import StoreSession, establish_session
from .view_counter import ViewCounter, run_once_per_session
from .live_counter import LiveViewCount, CounterUpdate, PULSE_DURATION, apply_count_update

__all__ = [
    'Settings',
    'get_settings',
    'clear_settings_cache',
    'KeyValueStorage',
    'MemoryStorage',
    'SessionStateStorage',
    'BrowserCookieStorage',
    'StorageUnavailableError',
    'VISITOR_ID_KEY',
    'VisitorIdentityProvider',
    'generate_visitor_id',
    'get_or_create_visitor_id',
    'is_valid_visitor_id',
    'DocumentSnapshot',
    'DocumentStore',
    'FirestoreDocumentStore',
    'MemoryDocumentStore',
    'StoreError',
    'Subscription',
    'DocumentPaths',
    'StoreSession',
    'establish_session',
    'ViewCounter',
    'run_once_per_session',
    'LiveViewCount',
    'CounterUpdate',
    'PULSE_DURATION',
    'apply_count_update',
]
