"""Append-only activity log, newest first, capped length."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Callable, Optional, Union

from codegraph_store.formatting import TimestampFormatter, epoch_millis, iso_instant, utcnow
from codegraph_store.models import ActivityKind, LogEntry
from codegraph_store.persistence.codec import JsonSlot
from codegraph_store.persistence.protocols import IKeyValueStore

DEFAULT_HISTORY_KEY = "code-to-graph-history"
DEFAULT_MAX_ENTRIES = 20

_NO_PAYLOAD: Any = object()


class ActivityHistory:
    """Most-recent-first trail of user activity.

    Position, not timestamp, decides order: entry 0 is always the last one
    added, and overflow drops entries from the tail.
    """

    def __init__(
        self,
        store: IKeyValueStore,
        storage_key: str = DEFAULT_HISTORY_KEY,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        *,
        clock: Callable[[], datetime] = utcnow,
        formatter: Optional[TimestampFormatter] = None,
    ) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got {max_entries}")
        self.storage_key = storage_key
        self.max_entries = max_entries
        self._slot = JsonSlot(store, storage_key)
        self._clock = clock
        self._formatter = formatter or TimestampFormatter()

    def add(
        self,
        kind: Union[ActivityKind, str],
        description: str,
        payload: Any = _NO_PAYLOAD,
    ) -> None:
        """Prepend an entry. An omitted payload is stored as ``{}``; an explicit ``None`` as ``null``."""
        history = self.get_all()
        now = self._clock()
        entry = LogEntry(
            id=epoch_millis(now),
            kind=kind.value if isinstance(kind, Enum) else str(kind),
            description=description,
            payload={} if payload is _NO_PAYLOAD else payload,
            created_at=iso_instant(now),
            display_timestamp=self._formatter.format(now),
        )
        history.insert(0, entry.model_dump(by_alias=True))
        del history[self.max_entries :]
        self._slot.write(history)

    def get_all(self) -> list[Any]:
        return self._slot.read([], expect=list)

    def clear(self) -> None:
        self._slot.remove()
