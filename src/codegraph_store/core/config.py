"""Nested pydantic-settings configuration for codegraph-store.

Every sub-config reads its own ``CODEGRAPH_<GROUP>_*`` env vars::

    export CODEGRAPH_STORAGE_BACKEND=memory
    export CODEGRAPH_COLLECTION_MAX_ITEMS=100
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class StorageConfig(BaseSettings):
    """Backing key-value store.

    Env vars use ``CODEGRAPH_STORAGE_`` prefix. ``quota_bytes=0`` disables
    the quota; the default mirrors a browser's 5 MiB localStorage budget.
    """

    model_config = {"env_prefix": "CODEGRAPH_STORAGE_"}

    backend: Literal["file", "memory"] = "file"
    store_path: Path = Path("./.codegraph")
    quota_bytes: int = Field(default=5 * 1024 * 1024, ge=0)


class CollectionConfig(BaseSettings):
    """Named project collections.

    Env vars use ``CODEGRAPH_COLLECTION_`` prefix.
    """

    model_config = {"env_prefix": "CODEGRAPH_COLLECTION_"}

    graphs_key: str = "code-to-graph-graphs"
    hamming_key: str = "code-to-graph-hamming"
    max_items: int = Field(default=50, ge=1)


class HistoryConfig(BaseSettings):
    """Activity history.

    Env vars use ``CODEGRAPH_HISTORY_`` prefix.
    """

    model_config = {"env_prefix": "CODEGRAPH_HISTORY_"}

    storage_key: str = "code-to-graph-history"
    max_entries: int = Field(default=20, ge=1)


class PreferencesConfig(BaseSettings):
    """Env vars use ``CODEGRAPH_PREFERENCES_`` prefix."""

    model_config = {"env_prefix": "CODEGRAPH_PREFERENCES_"}

    storage_key: str = "code-to-graph-preferences"


class DisplayConfig(BaseSettings):
    """Rendering of human-readable timestamps.

    Env vars use ``CODEGRAPH_DISPLAY_`` prefix.
    """

    model_config = {"env_prefix": "CODEGRAPH_DISPLAY_"}

    timezone: str = "Asia/Kolkata"


class ObservabilityConfig(BaseSettings):
    """Env vars use ``CODEGRAPH_OBSERVABILITY_`` prefix."""

    model_config = {"env_prefix": "CODEGRAPH_OBSERVABILITY_"}

    log_level: str = "INFO"
    log_format: Literal["auto", "console", "json"] = "auto"


class AppSettings(BaseSettings):
    """Top-level application settings aggregating all sub-configs."""

    storage: StorageConfig = StorageConfig()
    collection: CollectionConfig = CollectionConfig()
    history: HistoryConfig = HistoryConfig()
    preferences: PreferencesConfig = PreferencesConfig()
    display: DisplayConfig = DisplayConfig()
    observability: ObservabilityConfig = ObservabilityConfig()
