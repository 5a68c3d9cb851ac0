"""
Siraw Links - Document Store Module
====================================
Point reads, merge writes and change subscriptions against the shared
document database. Firestore in production, an in-process store for
local runs and tests.
"""

import copy
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import structlog

logger = structlog.get_logger()


class StoreError(Exception):
    """A read, write or subscribe call against the store failed."""


@dataclass
class DocumentSnapshot:
    """State of one document at read time."""

    path: str
    exists: bool
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.data) if self.exists else {}

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default) if self.exists else default


ChangeCallback = Callable[[DocumentSnapshot], None]
ErrorCallback = Callable[[Exception], None]


class Subscription:
    """Handle for a live document subscription."""

    def __init__(self, cancel: Optional[Callable[[], None]] = None):
        self._cancel = cancel
        self._active = cancel is not None
        self._lock = threading.Lock()

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        """Stop receiving notifications. Safe to call more than once."""
        with self._lock:
            if not self._active:
                return
            self._active = False
            cancel, self._cancel = self._cancel, None
        cancel()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.unsubscribe()
        return False


class DocumentStore:
    """Interface for the shared document store."""

    def get(self, path: str) -> DocumentSnapshot:
        raise NotImplementedError

    def set(self, path: str, data: Dict[str, Any], merge: bool = False) -> None:
        raise NotImplementedError

    def subscribe(
        self,
        path: str,
        on_change: ChangeCallback,
        on_error: Optional[ErrorCallback] = None,
    ) -> Subscription:
        raise NotImplementedError

    def increment(
        self,
        path: str,
        field_name: str,
        amount: int = 1,
        extra: Optional[Dict[str, Any]] = None,
    ) -> int:
        """Atomically add ``amount`` to a numeric field and return the new value."""
        raise NotImplementedError


class MemoryDocumentStore(DocumentStore):
    """
    Thread-safe in-process document store.

    Listeners run synchronously on the writing thread, after the write
    is applied and before the store lock is released, so every listener
    sees writes in order. The first notification for a new subscriber
    carries the current state of the document.
    """

    def __init__(self, documents: Optional[Dict[str, Dict[str, Any]]] = None):
        self._docs: Dict[str, Dict[str, Any]] = copy.deepcopy(documents or {})
        self._listeners: Dict[str, List[tuple]] = {}
        self._lock = threading.RLock()
        self.writes: List[tuple] = []

    def _snapshot(self, path: str) -> DocumentSnapshot:
        if path in self._docs:
            return DocumentSnapshot(path, True, copy.deepcopy(self._docs[path]))
        return DocumentSnapshot(path, False, {})

    def get(self, path: str) -> DocumentSnapshot:
        with self._lock:
            return self._snapshot(path)

    def set(self, path: str, data: Dict[str, Any], merge: bool = False) -> None:
        with self._lock:
            if merge and path in self._docs:
                self._docs[path].update(copy.deepcopy(data))
            else:
                self._docs[path] = copy.deepcopy(data)
            self.writes.append((path, copy.deepcopy(data), merge))
            snapshot = self._snapshot(path)
            listeners = list(self._listeners.get(path, []))
            self._notify(listeners, snapshot)

    def increment(self, path, field_name, amount=1, extra=None) -> int:
        with self._lock:
            current = self._docs.get(path, {}).get(field_name) or 0
            new_value = int(current) + int(amount)
            update = dict(extra or {})
            update[field_name] = new_value
            self.set(path, update, merge=True)
        return new_value

    def subscribe(self, path, on_change, on_error=None) -> Subscription:
        entry = (on_change, on_error)

        def cancel():
            with self._lock:
                listeners = self._listeners.get(path, [])
                if entry in listeners:
                    listeners.remove(entry)

        with self._lock:
            self._listeners.setdefault(path, []).append(entry)
            self._notify([entry], self._snapshot(path))
        return Subscription(cancel)

    def fail_subscribers(self, path: str, error: Exception) -> None:
        """Deliver ``error`` to every subscriber of ``path``."""
        with self._lock:
            listeners = list(self._listeners.get(path, []))
        for _, on_error in listeners:
            if on_error is not None:
                on_error(error)

    def listener_count(self, path: str) -> int:
        with self._lock:
            return len(self._listeners.get(path, []))

    def _notify(self, listeners, snapshot: DocumentSnapshot) -> None:
        for on_change, on_error in listeners:
            try:
                on_change(copy.deepcopy(snapshot))
            except Exception as e:
                logger.error("Document listener failed", path=snapshot.path, error=str(e))
                if on_error is not None:
                    on_error(e)


class FirestoreDocumentStore(DocumentStore):
    """Document store backed by a ``google.cloud.firestore.Client``."""

    def __init__(self, client):
        self._client = client

    def get(self, path: str) -> DocumentSnapshot:
        try:
            snap = self._client.document(path).get()
        except Exception as e:
            raise StoreError(f"Read failed for {path}: {e}") from e
        if not snap.exists:
            return DocumentSnapshot(path, False, {})
        return DocumentSnapshot(path, True, snap.to_dict() or {})

    def set(self, path: str, data: Dict[str, Any], merge: bool = False) -> None:
        try:
            self._client.document(path).set(data, merge=merge)
        except Exception as e:
            raise StoreError(f"Write failed for {path}: {e}") from e

    def increment(self, path, field_name, amount=1, extra=None) -> int:
        from google.cloud import firestore

        doc_ref = self._client.document(path)

        @firestore.transactional
        def _tx_update(transaction) -> int:
            snap = doc_ref.get(transaction=transaction)
            current = (snap.to_dict() or {}).get(field_name) if snap.exists else 0
            new_value = int(current or 0) + int(amount)
            update = dict(extra or {})
            update[field_name] = new_value
            transaction.set(doc_ref, update, merge=True)
            return new_value

        try:
            return _tx_update(self._client.transaction())
        except Exception as e:
            raise StoreError(f"Increment failed for {path}: {e}") from e

    def subscribe(self, path, on_change, on_error=None) -> Subscription:
        def _on_snapshot(doc_snapshots, changes, read_time):
            try:
                for snap in doc_snapshots:
                    exists = bool(snap.exists)
                    on_change(DocumentSnapshot(path, exists, (snap.to_dict() or {}) if exists else {}))
            except Exception as e:
                logger.error("Snapshot handler failed", path=path, error=str(e))
                if on_error is not None:
                    on_error(e)

        try:
            watch = self._client.document(path).on_snapshot(_on_snapshot)
        except Exception as e:
            raise StoreError(f"Subscribe failed for {path}: {e}") from e
        return Subscription(watch.unsubscribe)
