"""Tests for config classes — defaults and env overrides."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from codegraph_store.core.config import (
    AppSettings,
    CollectionConfig,
    DisplayConfig,
    HistoryConfig,
    ObservabilityConfig,
    PreferencesConfig,
    StorageConfig,
)


class TestStorageConfig:
    def test_defaults(self) -> None:
        config = StorageConfig()
        assert config.backend == "file"
        assert config.store_path == Path("./.codegraph")
        assert config.quota_bytes == 5 * 1024 * 1024

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CODEGRAPH_STORAGE_BACKEND", "memory")
        monkeypatch.setenv("CODEGRAPH_STORAGE_QUOTA_BYTES", "0")
        config = StorageConfig()
        assert config.backend == "memory"
        assert config.quota_bytes == 0

    def test_rejects_unknown_backend(self) -> None:
        with pytest.raises(ValidationError):
            StorageConfig(backend="s3")


class TestCollectionConfig:
    def test_defaults(self) -> None:
        config = CollectionConfig()
        assert config.graphs_key == "code-to-graph-graphs"
        assert config.hamming_key == "code-to-graph-hamming"
        assert config.max_items == 50

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CODEGRAPH_COLLECTION_MAX_ITEMS", "7")
        assert CollectionConfig().max_items == 7

    def test_rejects_zero_capacity(self) -> None:
        with pytest.raises(ValidationError):
            CollectionConfig(max_items=0)


class TestOtherConfigs:
    def test_history_defaults(self) -> None:
        config = HistoryConfig()
        assert config.storage_key == "code-to-graph-history"
        assert config.max_entries == 20

    def test_preferences_defaults(self) -> None:
        assert PreferencesConfig().storage_key == "code-to-graph-preferences"

    def test_display_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CODEGRAPH_DISPLAY_TIMEZONE", "Europe/Berlin")
        assert DisplayConfig().timezone == "Europe/Berlin"

    def test_app_settings_aggregates(self) -> None:
        settings = AppSettings()
        assert settings.history.max_entries == 20
        assert settings.observability.log_level == "INFO"
        assert settings.observability.log_format == "auto"

    def test_log_format_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CODEGRAPH_OBSERVABILITY_LOG_FORMAT", "json")
        assert ObservabilityConfig().log_format == "json"

    def test_log_format_rejects_unknown(self) -> None:
        with pytest.raises(ValidationError):
            ObservabilityConfig(log_format="xml")
