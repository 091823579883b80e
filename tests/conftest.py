"""Shared fixtures for codegraph-store tests."""

from __future__ import annotations

import os

import pytest

from tests.fakes.fake_store import FakeKeyValueStore, StepClock


@pytest.fixture
def store() -> FakeKeyValueStore:
    return FakeKeyValueStore()


@pytest.fixture
def clock() -> StepClock:
    """Deterministic clock starting 2026-10-18 09:00 UTC, one second per call."""
    return StepClock()


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer CODEGRAPH_* and container env vars out of config and startup checks."""
    for name in list(os.environ):
        if name.startswith("CODEGRAPH_"):
            monkeypatch.delenv(name)
    monkeypatch.delenv("KUBERNETES_SERVICE_HOST", raising=False)
    monkeypatch.delenv("ECS_CONTAINER_METADATA_URI", raising=False)
