"""Pluggable key-value stores backing the project, history and preference data."""

from __future__ import annotations

from typing import TYPE_CHECKING

from codegraph_store.persistence.codec import JsonSlot, dumps, dumps_pretty
from codegraph_store.persistence.file_backend import FileKeyValueStore
from codegraph_store.persistence.memory_backend import MemoryKeyValueStore
from codegraph_store.persistence.protocols import IKeyValueStore

if TYPE_CHECKING:
    from codegraph_store.core.config import StorageConfig

__all__ = [
    "IKeyValueStore",
    "FileKeyValueStore",
    "MemoryKeyValueStore",
    "JsonSlot",
    "create_store",
    "dumps",
    "dumps_pretty",
]


def create_store(settings: object | None = None) -> IKeyValueStore:
    """Create a key-value store from settings.

    Args:
        settings: An ``AppSettings`` or ``StorageConfig`` instance.
            If None, returns an unbounded MemoryKeyValueStore.
    """
    config: StorageConfig | None = None

    if settings is not None:
        config = getattr(settings, "storage", None)
        if config is None and hasattr(settings, "backend"):
            config = settings  # type: ignore[assignment]

    if config is None:
        return MemoryKeyValueStore()

    backend = config.backend
    if backend == "memory":
        return MemoryKeyValueStore(quota_bytes=config.quota_bytes)
    elif backend == "file":
        return FileKeyValueStore(config.store_path, quota_bytes=config.quota_bytes)
    else:
        raise ValueError(f"Unknown storage backend: {backend!r}")
