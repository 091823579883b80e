"""Startup validation: fail-fast on critical misconfigurations."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

if TYPE_CHECKING:
    from codegraph_store.core.config import AppSettings

log = logging.getLogger(__name__)


def validate_settings(settings: AppSettings) -> None:
    """Validate application settings at startup. Raises ValueError on fatal misconfig."""
    _check_storage_keys(settings)
    _check_timezone(settings)
    _check_persistence(settings)


def _check_storage_keys(settings: AppSettings) -> None:
    """Each dataset owns exactly one key; sharing one would overwrite the other's blob."""
    keys = {
        "collection.graphs_key": settings.collection.graphs_key,
        "collection.hamming_key": settings.collection.hamming_key,
        "history.storage_key": settings.history.storage_key,
        "preferences.storage_key": settings.preferences.storage_key,
    }
    seen: dict[str, str] = {}
    for field, key in keys.items():
        if not key:
            raise ValueError(f"{field} must not be empty")
        if key in seen:
            raise ValueError(
                f"{field} and {seen[key]} both use storage key {key!r}. "
                "Each dataset needs its own key."
            )
        seen[key] = field


def _check_timezone(settings: AppSettings) -> None:
    try:
        ZoneInfo(settings.display.timezone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(
            f"CODEGRAPH_DISPLAY_TIMEZONE={settings.display.timezone!r} is not a known timezone"
        ) from exc


def _check_persistence(settings: AppSettings) -> None:
    """Warn about file persistence in containerized environments."""
    is_container = bool(
        os.environ.get("ECS_CONTAINER_METADATA_URI")
        or os.environ.get("KUBERNETES_SERVICE_HOST")
    )
    if is_container and settings.storage.backend == "file":
        log.warning(
            "CODEGRAPH_STORAGE_BACKEND=file in a container environment. "
            "Saved projects will be lost on container restart unless %s is a mounted volume.",
            settings.storage.store_path,
        )
