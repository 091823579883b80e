"""Named project collections with a capacity cap and recency eviction."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from codegraph_store.core.exceptions import PersistenceError
from codegraph_store.formatting import (
    TimestampFormatter,
    epoch_millis,
    iso_instant,
    parse_instant,
    utcnow,
)
from codegraph_store.models import ImportResult, Record, StorageStats
from codegraph_store.persistence.codec import JsonSlot, dumps, dumps_pretty, loads
from codegraph_store.persistence.protocols import IKeyValueStore

log = logging.getLogger(__name__)

DEFAULT_MAX_ITEMS = 50

# Records without a parseable timestamp rank behind every real one.
_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _recency(record: Any) -> datetime:
    if not isinstance(record, dict):
        return _OLDEST
    return parse_instant(record.get("timestamp")) or _OLDEST


class ProjectStorage:
    """A collection of named records persisted as one JSON object under one key.

    ``name`` is the identity: saving an existing name replaces that record.
    When a save pushes the collection past ``max_items`` only the
    ``max_items`` most recently timestamped records are kept. That can
    include dropping the record just saved if the clock that stamped it is
    behind the others.

    Reads return the raw persisted mapping; imported data is kept exactly
    as imported.
    """

    def __init__(
        self,
        store: IKeyValueStore,
        storage_key: str,
        max_items: int = DEFAULT_MAX_ITEMS,
        *,
        clock: Callable[[], datetime] = utcnow,
        formatter: Optional[TimestampFormatter] = None,
    ) -> None:
        if max_items < 1:
            raise ValueError(f"max_items must be at least 1, got {max_items}")
        self.storage_key = storage_key
        self.max_items = max_items
        self._slot = JsonSlot(store, storage_key)
        self._clock = clock
        self._formatter = formatter or TimestampFormatter()

    def save(self, name: str, payload: Any) -> bool:
        """Create or overwrite the record for ``name``. Always persists."""
        items = self.get_all()
        now = self._clock()
        record = Record(
            id=epoch_millis(now),
            name=name,
            payload=payload,
            created_at=iso_instant(now),
            display_timestamp=self._formatter.format(now),
        )
        items[name] = record.model_dump(by_alias=True)

        if len(items) > self.max_items:
            ranked = sorted(items.items(), key=lambda kv: _recency(kv[1]), reverse=True)
            kept = dict(ranked[: self.max_items])
            log.debug(
                "Evicted %d record(s) from %s", len(items) - len(kept), self.storage_key
            )
            items = kept

        self._slot.write(items)
        return True

    def get_all(self) -> dict[str, Any]:
        return self._slot.read({}, expect=dict)

    def get(self, name: str) -> Optional[dict[str, Any]]:
        return self.get_all().get(name)

    def names(self) -> list[str]:
        """Record names, most recently saved first."""
        items = self.get_all()
        return sorted(items, key=lambda n: _recency(items[n]), reverse=True)

    def delete(self, name: str) -> bool:
        items = self.get_all()
        items.pop(name, None)
        self._slot.write(items)
        return True

    def clear(self) -> bool:
        self._slot.remove()
        return True

    def export(self) -> str:
        """The whole collection as indented JSON, suitable for ``import_json``."""
        return dumps_pretty(self.get_all())

    def import_json(self, json_string: str) -> ImportResult:
        """Replace the collection with the parsed document.

        Nothing is written unless the document parses as strict JSON;
        ``NaN`` and ``Infinity`` are rejected. The cap is not applied
        here; the next ``save`` trims the collection.
        """
        try:
            data = loads(json_string)
        except ValueError as exc:
            return ImportResult(success=False, error=str(exc))
        try:
            self._slot.write(data)
        except PersistenceError as exc:
            log.warning("Import into %s failed: %s", self.storage_key, exc)
            return ImportResult(success=False, error=str(exc))
        return ImportResult(success=True)

    def get_stats(self) -> StorageStats:
        items = self.get_all()
        size = len(dumps(items).encode("utf-8"))
        return StorageStats(count=len(items), size_kb=f"{size / 1024:.2f}")
