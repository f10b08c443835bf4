"""Ephemeral notification feed with time-based expiry."""

import threading
import time
import uuid
from typing import Callable, List, Optional

from ..models.notification import Notification


class NotificationCenter:
    """Newest-first list of notifications that expire after ``ttl_seconds``.

    The purge job runs on the scheduler thread, so every access to the
    list goes through ``_lock``.
    """

    def __init__(self, ttl_seconds: float = 5.0, clock: Callable[[], float] = time.time):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._items: List[Notification] = []
        self._lock = threading.Lock()

    def add(self, notification_type: str, message: str) -> Notification:
        notification = Notification(
            id=uuid.uuid4().hex,
            type=notification_type,
            message=message,
            timestamp=self._clock()
        )
        with self._lock:
            self._items.insert(0, notification)
        return notification

    def remove(self, notification_id: str) -> bool:
        with self._lock:
            before = len(self._items)
            self._items = [n for n in self._items if n.id != notification_id]
            return len(self._items) != before

    def active(self) -> List[Notification]:
        now = self._clock()
        with self._lock:
            return [n for n in self._items if not n.is_expired(self.ttl_seconds, now)]

    def purge_expired(self) -> int:
        """Drop expired notifications; returns how many were removed."""
        now = self._clock()
        with self._lock:
            kept = [n for n in self._items if not n.is_expired(self.ttl_seconds, now)]
            removed = len(self._items) - len(kept)
            self._items = kept
        return removed

    def latest(self) -> Optional[Notification]:
        with self._lock:
            return self._items[0] if self._items else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
