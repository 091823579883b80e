"""Exception hierarchy for codegraph-store."""

from __future__ import annotations


class CodegraphStoreError(Exception):
    """Base exception for all codegraph-store errors."""


class PersistenceError(CodegraphStoreError):
    """Raised when a key-value store operation fails."""


class StorageQuotaExceededError(PersistenceError):
    """A write would push the store past its byte quota."""

    def __init__(self, key: str, requested_bytes: int, quota_bytes: int) -> None:
        super().__init__(
            f"Writing {key!r} needs {requested_bytes} bytes, quota is {quota_bytes} bytes"
        )
        self.key = key
        self.requested_bytes = requested_bytes
        self.quota_bytes = quota_bytes


class DeserializationError(CodegraphStoreError):
    """A persisted blob could not be decoded as the expected JSON value."""

    def __init__(self, key: str, message: str, raw: str = "") -> None:
        super().__init__(f"Malformed data under {key!r}: {message}")
        self.key = key
        self.raw = raw


__all__ = [
    "CodegraphStoreError",
    "PersistenceError",
    "StorageQuotaExceededError",
    "DeserializationError",
]
