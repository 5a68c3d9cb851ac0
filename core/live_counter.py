"""
Siraw Links - Live View Count
==============================
Keeps the displayed view count in sync with the counter document and
flags a short pulse whenever the count changes.
"""

import queue
import threading
import weakref
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional

import structlog

from .document_store import DocumentSnapshot, DocumentStore, Subscription

logger = structlog.get_logger()

PULSE_DURATION = 0.5

_CLOSED = object()


@dataclass(frozen=True)
class CounterUpdate:
    """One change notification as seen by the display."""

    count: int
    previous: int
    pulsed: bool
    last_update: Optional[str] = None


def apply_count_update(previous: int, new: int) -> bool:
    """
    Decide whether a new count should pulse.

    The first value shown (previous 0) never pulses, and neither does a
    notification that leaves the count unchanged.
    """
    return new != previous and previous != 0


def _weak_callback(method: Callable) -> Callable:
    """Wrap a bound method so the caller does not keep its object alive."""
    ref = weakref.WeakMethod(method)

    def callback(*args):
        target = ref()
        if target is not None:
            target(*args)
    return callback


def _count_from(snapshot: DocumentSnapshot) -> int:
    if not snapshot.exists:
        return 0
    try:
        return int(snapshot.get('count') or 0)
    except (TypeError, ValueError):
        return 0


class LiveViewCount:
    """Subscription to the counter document with pulse state."""

    def __init__(
        self,
        store: DocumentStore,
        path: str,
        pulse_duration: float = PULSE_DURATION,
        timer_factory: Callable = threading.Timer,
    ):
        self.store = store
        self.path = path
        self.pulse_duration = pulse_duration
        self._timer_factory = timer_factory

        self._lock = threading.RLock()
        self._count = 0
        self._last_update: Optional[str] = None
        self._pulsing = False
        self._pulse_timer = None
        self._pulse_generation = 0
        self._error: Optional[str] = None
        self._subscription: Optional[Subscription] = None
        self._finalizer = None
        self._listeners: List[Callable[[CounterUpdate], None]] = []
        self._queues: List[queue.Queue] = []

    # -- state -------------------------------------------------------------

    @property
    def count(self) -> int:
        with self._lock:
            return self._count

    @property
    def is_pulsing(self) -> bool:
        with self._lock:
            return self._pulsing

    @property
    def last_update(self) -> Optional[str]:
        with self._lock:
            return self._last_update

    @property
    def error(self) -> Optional[str]:
        with self._lock:
            return self._error

    @property
    def active(self) -> bool:
        with self._lock:
            return self._subscription is not None and self._subscription.active

    # -- lifecycle ---------------------------------------------------------

    def start(self) -> bool:
        """
        Subscribe to the counter document. Calling it again is a no-op.

        Returns:
            True if the subscription is open
        """
        with self._lock:
            if self._subscription is not None and self._subscription.active:
                return True
        try:
            subscription = self.store.subscribe(
                self.path,
                _weak_callback(self._on_snapshot),
                _weak_callback(self._on_error),
            )
        except Exception as e:
            self._on_error(e)
            return False
        with self._lock:
            self._subscription = subscription
            # A session that ends without stop() still releases its listener
            self._finalizer = weakref.finalize(self, subscription.unsubscribe)
        return True

    def stop(self) -> None:
        """Unsubscribe, cancel a pending pulse reset and close event streams."""
        with self._lock:
            subscription, self._subscription = self._subscription, None
            finalizer, self._finalizer = self._finalizer, None
            timer, self._pulse_timer = self._pulse_timer, None
            self._pulsing = False
            queues, self._queues = self._queues, []
        if finalizer is not None:
            finalizer.detach()
        if subscription is not None:
            subscription.unsubscribe()
        if timer is not None:
            timer.cancel()
        for q in queues:
            q.put(_CLOSED)

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()
        return False

    # -- consumers ---------------------------------------------------------

    def add_listener(self, callback: Callable[[CounterUpdate], None]) -> Callable[[], None]:
        """
        Call ``callback`` with every CounterUpdate.

        Returns:
            Function removing the listener
        """
        with self._lock:
            self._listeners.append(callback)

        def remove():
            with self._lock:
                if callback in self._listeners:
                    self._listeners.remove(callback)
        return remove

    def events(self, timeout: Optional[float] = None) -> Iterator[CounterUpdate]:
        """
        Stream of CounterUpdate events, ending when ``stop()`` is called.

        Args:
            timeout: End the stream if no update arrives within this many seconds
        """
        q: queue.Queue = queue.Queue()
        with self._lock:
            self._queues.append(q)
        return self._drain(q, timeout)

    def _drain(self, q: queue.Queue, timeout: Optional[float]) -> Iterator[CounterUpdate]:
        try:
            while True:
                try:
                    item = q.get(timeout=timeout)
                except queue.Empty:
                    return
                if item is _CLOSED:
                    return
                yield item
        finally:
            with self._lock:
                if q in self._queues:
                    self._queues.remove(q)

    # -- callbacks ---------------------------------------------------------

    def _on_snapshot(self, snapshot: DocumentSnapshot) -> None:
        new_count = _count_from(snapshot)
        with self._lock:
            previous = self._count
            pulsed = snapshot.exists and apply_count_update(previous, new_count)
            self._count = new_count
            self._last_update = snapshot.get('lastUpdate')
            self._error = None
            if pulsed:
                self._start_pulse()
            update = CounterUpdate(new_count, previous, pulsed, self._last_update)
            listeners = list(self._listeners)
            queues = list(self._queues)

        for q in queues:
            q.put(update)
        for callback in listeners:
            try:
                callback(update)
            except Exception as e:
                logger.error("View count listener failed", error=str(e))

    def _on_error(self, error: Exception) -> None:
        logger.error("Error listening to view count", path=self.path, error=str(error))
        with self._lock:
            self._error = str(error)

    def _start_pulse(self) -> None:
        if self._pulse_timer is not None:
            self._pulse_timer.cancel()
        self._pulsing = True
        self._pulse_generation += 1
        timer = self._timer_factory(self.pulse_duration, self._end_pulse, args=(self._pulse_generation,))
        if hasattr(timer, 'daemon'):
            timer.daemon = True
        self._pulse_timer = timer
        timer.start()

    def _end_pulse(self, generation: int) -> None:
        with self._lock:
            if generation != self._pulse_generation:
                return
            self._pulsing = False
            self._pulse_timer = None
