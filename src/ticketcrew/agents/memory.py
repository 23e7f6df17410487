"""Per-ticket interaction log kept by each agent."""

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True)
class MemoryEntry:
    """One recorded interaction of an agent with a ticket."""

    ticket_id: Any
    role: str
    kind: str
    content: str
    meta: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        return {
            "ticket_id": self.ticket_id,
            "role": self.role,
            "kind": self.kind,
            "content": self.content,
            "meta": dict(self.meta),
            "timestamp": self.timestamp.isoformat(),
        }


class MemoryLog:
    """Append-only mapping of ticket id -> entries.

    Singleton agents are shared across tickets processed concurrently, so
    appends are serialized per ticket id. Entries are never overwritten.
    """

    def __init__(self) -> None:
        self._entries: dict[Any, list[MemoryEntry]] = {}
        self._locks: dict[Any, threading.Lock] = {}
        self._guard = threading.Lock()

    def _lock_for(self, ticket_id: Any) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(ticket_id)
            if lock is None:
                lock = self._locks[ticket_id] = threading.Lock()
            return lock

    def append(self, entry: MemoryEntry) -> None:
        with self._lock_for(entry.ticket_id):
            with self._guard:
                entries = self._entries.setdefault(entry.ticket_id, [])
            entries.append(entry)

    def entries(self, ticket_id: Any) -> tuple[MemoryEntry, ...]:
        """Snapshot of the entries recorded for a ticket, oldest first.

        Reading an unknown ticket id leaves no trace in the log.
        """
        with self._guard:
            entries = self._entries.get(ticket_id)
            lock = self._locks.get(ticket_id)
        if entries is None or lock is None:
            return ()
        with lock:
            return tuple(entries)

    def ticket_ids(self) -> list[Any]:
        with self._guard:
            return list(self._entries.keys())

    def __len__(self) -> int:
        with self._guard:
            return sum(len(entries) for entries in self._entries.values())
