"""
Clock collaborators.
Transition timestamps come from an injected clock so records are reproducible.
"""
from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    def now(self) -> str: ...


class SystemClock:
    """UTC wall clock rendered as ISO-8601 with second precision."""

    def now(self) -> str:
        return datetime.now(timezone.utc).isoformat(timespec="seconds")


class FixedClock:
    """Clock that always reports the same instant until moved."""

    def __init__(self, timestamp: str = "2024-01-01T00:00:00+00:00"):
        self.timestamp = timestamp

    def now(self) -> str:
        return self.timestamp

    def set(self, timestamp: str) -> None:
        self.timestamp = timestamp
