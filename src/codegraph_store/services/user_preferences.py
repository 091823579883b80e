"""User preferences with fallback defaults."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Optional

from codegraph_store.persistence.codec import JsonSlot
from codegraph_store.persistence.protocols import IKeyValueStore

DEFAULT_PREFERENCES_KEY = "code-to-graph-preferences"

DEFAULT_PREFERENCES: Mapping[str, Any] = MappingProxyType(
    {
        "theme": "light",
        "autoSave": True,
        "showHistory": True,
        "animationsEnabled": True,
        "defaultGraphLayout": "circular",
        "graphNodeColor": "#667eea",
        "graphHubColor": "#f6ad55",
    }
)


class UserPreferences:
    """Settings persisted as one JSON object; unset keys read as defaults.

    Only explicitly set keys are written, so a later change to the defaults
    table reaches every user who never touched that key.
    """

    def __init__(
        self,
        store: IKeyValueStore,
        storage_key: str = DEFAULT_PREFERENCES_KEY,
        defaults: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.storage_key = storage_key
        self._slot = JsonSlot(store, storage_key)
        self._defaults = MappingProxyType(dict(DEFAULT_PREFERENCES if defaults is None else defaults))

    @property
    def defaults(self) -> Mapping[str, Any]:
        return self._defaults

    def get(self, key: str, default: Any = None) -> Any:
        """Persisted value if the key was ever set (even to a falsy value), else its default."""
        stored = self._stored()
        if key in stored:
            return stored[key]
        return self._defaults.get(key, default)

    def set(self, key: str, value: Any) -> None:
        stored = self._stored()
        stored[key] = value
        self._slot.write(stored)

    def get_all(self) -> dict[str, Any]:
        return {**self._defaults, **self._stored()}

    def reset(self) -> None:
        self._slot.write(dict(self._defaults))

    def _stored(self) -> dict[str, Any]:
        return self._slot.read({}, expect=dict)
