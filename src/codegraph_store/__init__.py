"""codegraph-store: local persistence for Code-to-Graph projects.

::

    from codegraph_store import AppSettings, create_workspace

    workspace = create_workspace(AppSettings())
    workspace.graphs.save("ring", {"nodes": "A, B", "edges": "A-B"})
    workspace.history.add("graph", "Saved ring")
    workspace.preferences.get("theme")
"""

from __future__ import annotations

from codegraph_store.core.config import AppSettings
from codegraph_store.core.exceptions import (
    CodegraphStoreError,
    DeserializationError,
    PersistenceError,
    StorageQuotaExceededError,
)
from codegraph_store.models import ActivityKind, ImportResult, LogEntry, Record, StorageStats
from codegraph_store.persistence import (
    FileKeyValueStore,
    IKeyValueStore,
    MemoryKeyValueStore,
    create_store,
)
from codegraph_store.services import (
    DEFAULT_PREFERENCES,
    ActivityHistory,
    ProjectStorage,
    UserPreferences,
    Workspace,
    create_workspace,
)
from codegraph_store.templates import GRAPH_TEMPLATES, GraphTemplate, get_template, list_templates

__all__ = [
    "AppSettings",
    "CodegraphStoreError",
    "PersistenceError",
    "StorageQuotaExceededError",
    "DeserializationError",
    "ActivityKind",
    "Record",
    "LogEntry",
    "StorageStats",
    "ImportResult",
    "IKeyValueStore",
    "MemoryKeyValueStore",
    "FileKeyValueStore",
    "create_store",
    "ProjectStorage",
    "ActivityHistory",
    "UserPreferences",
    "DEFAULT_PREFERENCES",
    "Workspace",
    "create_workspace",
    "GraphTemplate",
    "GRAPH_TEMPLATES",
    "get_template",
    "list_templates",
]
