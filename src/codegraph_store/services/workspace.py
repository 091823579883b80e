"""Explicit wiring of the four persisted datasets over one key-value store."""

from __future__ import annotations

import dataclasses
import logging
from typing import Optional

from codegraph_store.core.config import AppSettings
from codegraph_store.formatting import TimestampFormatter
from codegraph_store.persistence import create_store
from codegraph_store.persistence.protocols import IKeyValueStore
from codegraph_store.services.activity_history import ActivityHistory
from codegraph_store.services.project_storage import ProjectStorage
from codegraph_store.services.user_preferences import UserPreferences

log = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class Workspace:
    """Graph projects, Hamming projects, activity history and preferences."""

    graphs: ProjectStorage
    hamming: ProjectStorage
    history: ActivityHistory
    preferences: UserPreferences

    def dataset(self, name: str) -> ProjectStorage:
        """Look up a project collection by name (``graphs`` or ``hamming``)."""
        if name == "graphs":
            return self.graphs
        if name == "hamming":
            return self.hamming
        raise KeyError(f"Unknown dataset {name!r}; expected 'graphs' or 'hamming'")


def create_workspace(
    settings: Optional[AppSettings] = None,
    store: Optional[IKeyValueStore] = None,
) -> Workspace:
    """Build a workspace from settings, creating the store from them if none is given."""
    settings = settings or AppSettings()
    if store is None:
        store = create_store(settings)
    formatter = TimestampFormatter(settings.display.timezone)

    collection = settings.collection
    workspace = Workspace(
        graphs=ProjectStorage(
            store, collection.graphs_key, collection.max_items, formatter=formatter
        ),
        hamming=ProjectStorage(
            store, collection.hamming_key, collection.max_items, formatter=formatter
        ),
        history=ActivityHistory(
            store,
            settings.history.storage_key,
            settings.history.max_entries,
            formatter=formatter,
        ),
        preferences=UserPreferences(store, settings.preferences.storage_key),
    )
    log.debug("Workspace ready on %s backend", settings.storage.backend)
    return workspace
