"""Transient user-facing notification model."""

import time
from dataclasses import dataclass, field
from typing import Dict, Any

NOTIFICATION_TYPES = ("success", "error", "info", "warning")


@dataclass
class Notification:
    id: str
    type: str
    message: str
    timestamp: float = field(default_factory=time.time)

    def __post_init__(self):
        if self.type not in NOTIFICATION_TYPES:
            raise ValueError(f"Notification type must be one of {', '.join(NOTIFICATION_TYPES)}")

    def is_expired(self, ttl_seconds: float, now: float = None) -> bool:
        now = time.time() if now is None else now
        return now - self.timestamp >= ttl_seconds

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "message": self.message,
            "timestamp": self.timestamp
        }
