"""Key-value store protocol — the contract every backing store implements."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class IKeyValueStore(Protocol):
    """Synchronous string-to-string store (memory, local files, etc.).

    Writes replace the whole value for a key atomically. A store with a
    capacity limit raises ``StorageQuotaExceededError`` from ``set`` and
    keeps the previous value.
    """

    def get(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None if absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        ...

    def remove(self, key: str) -> None:
        """Delete key (no-op if not found)."""
        ...

    def clear(self) -> None:
        """Delete every key."""
        ...

    def list_keys(self, prefix: str = "") -> list[str]:
        """List all keys matching the optional prefix."""
        ...
