"""Policy layer: bounded collections, activity history, preferences."""

from __future__ import annotations

from codegraph_store.services.activity_history import ActivityHistory
from codegraph_store.services.project_storage import ProjectStorage
from codegraph_store.services.user_preferences import DEFAULT_PREFERENCES, UserPreferences
from codegraph_store.services.workspace import Workspace, create_workspace

__all__ = [
    "ProjectStorage",
    "ActivityHistory",
    "UserPreferences",
    "DEFAULT_PREFERENCES",
    "Workspace",
    "create_workspace",
]
