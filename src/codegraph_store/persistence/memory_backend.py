"""In-memory key-value store — dict-backed, ideal for tests."""

from __future__ import annotations

import logging
from typing import Optional

from codegraph_store.core.exceptions import StorageQuotaExceededError

log = logging.getLogger(__name__)


def entry_size(key: str, value: str) -> int:
    """Bytes an entry counts against a quota (UTF-8 key plus value)."""
    return len(key.encode("utf-8")) + len(value.encode("utf-8"))


class MemoryKeyValueStore:
    """Stores strings in a plain dict — nothing touches disk.

    ``quota_bytes`` caps the total size of all entries; ``None`` or ``0``
    means unbounded.
    """

    def __init__(self, quota_bytes: Optional[int] = None) -> None:
        self._store: dict[str, str] = {}
        self._quota = quota_bytes or None

    def get(self, key: str) -> Optional[str]:
        return self._store.get(key)

    def set(self, key: str, value: str) -> None:
        if self._quota is not None:
            used = sum(entry_size(k, v) for k, v in self._store.items() if k != key)
            requested = used + entry_size(key, value)
            if requested > self._quota:
                raise StorageQuotaExceededError(key, requested, self._quota)
        self._store[key] = value
        log.debug("Saved %s to memory store (%d chars)", key, len(value))

    def remove(self, key: str) -> None:
        self._store.pop(key, None)

    def clear(self) -> None:
        self._store.clear()

    def list_keys(self, prefix: str = "") -> list[str]:
        return sorted(k for k in self._store if k.startswith(prefix))

    def used_bytes(self) -> int:
        """Total bytes currently counted against the quota."""
        return sum(entry_size(k, v) for k, v in self._store.items())
