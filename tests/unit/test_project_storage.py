"""Tests for ProjectStorage — save/overwrite, eviction, import/export, stats."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta, timezone

import pytest

from codegraph_store.core.exceptions import StorageQuotaExceededError
from codegraph_store.services.project_storage import ProjectStorage
from tests.fakes.fake_store import FakeKeyValueStore, StepClock

KEY = "code-to-graph-graphs"


def _storage(store: FakeKeyValueStore, clock: StepClock, max_items: int = 50) -> ProjectStorage:
    return ProjectStorage(store, KEY, max_items, clock=clock)


class TestSave:
    def test_save_builds_record(self, store: FakeKeyValueStore, clock: StepClock) -> None:
        storage = _storage(store, clock)
        assert storage.save("ring", {"nodes": "A, B"}) is True

        record = storage.get("ring")
        assert record == {
            "id": int(datetime(2026, 10, 18, 9, 0, tzinfo=timezone.utc).timestamp() * 1000),
            "name": "ring",
            "data": {"nodes": "A, B"},
            "timestamp": "2026-10-18T09:00:00.000Z",
            "dateCreated": "18 Oct 2026, 2:30 pm",
        }

    def test_persists_compact_json(self, store: FakeKeyValueStore, clock: StepClock) -> None:
        storage = _storage(store, clock)
        storage.save("a", [1, 2])
        raw = store.get(KEY)
        assert raw is not None
        assert raw == json.dumps(json.loads(raw), separators=(",", ":"), ensure_ascii=False)
        assert json.loads(raw)["a"]["data"] == [1, 2]

    def test_overwrite_keeps_count(self, store: FakeKeyValueStore, clock: StepClock) -> None:
        storage = _storage(store, clock)
        storage.save("a", 1)
        storage.save("b", 2)
        first = storage.get("a")
        storage.save("a", 3)

        items = storage.get_all()
        assert len(items) == 2
        assert items["a"]["data"] == 3
        assert items["a"]["timestamp"] > first["timestamp"]
        assert items["a"]["id"] > first["id"]

    def test_write_failure_propagates(self, store: FakeKeyValueStore, clock: StepClock) -> None:
        storage = _storage(store, clock)
        store.fail_writes = True
        with pytest.raises(StorageQuotaExceededError):
            storage.save("a", 1)

    def test_non_finite_payload_is_not_written(
        self, store: FakeKeyValueStore, clock: StepClock
    ) -> None:
        storage = _storage(store, clock)
        storage.save("a", 1)
        before = store.get(KEY)
        with pytest.raises(ValueError):
            storage.save("b", {"weight": float("nan")})
        assert store.get(KEY) == before

    def test_rejects_zero_capacity(self, store: FakeKeyValueStore) -> None:
        with pytest.raises(ValueError):
            ProjectStorage(store, KEY, 0)


class TestEviction:
    def test_count_never_exceeds_cap(self, store: FakeKeyValueStore, clock: StepClock) -> None:
        storage = _storage(store, clock, max_items=3)
        for i in range(10):
            storage.save(f"p{i}", i)
            assert len(storage.get_all()) <= 3

    def test_keeps_most_recent(self, store: FakeKeyValueStore, clock: StepClock) -> None:
        storage = _storage(store, clock, max_items=3)
        for name in ("a", "b", "c", "d", "e"):
            storage.save(name, name)
        assert set(storage.get_all()) == {"c", "d", "e"}

    def test_overwrite_refreshes_recency(self, store: FakeKeyValueStore, clock: StepClock) -> None:
        storage = _storage(store, clock, max_items=3)
        for name in ("a", "b", "c"):
            storage.save(name, name)
        storage.save("a", "again")
        storage.save("d", "d")
        assert set(storage.get_all()) == {"a", "c", "d"}

    def test_stale_clock_evicts_the_new_record(
        self, store: FakeKeyValueStore, clock: StepClock
    ) -> None:
        storage = _storage(store, clock, max_items=2)
        storage.save("a", 1)
        storage.save("b", 2)
        clock.set(datetime(2001, 1, 1, tzinfo=timezone.utc))
        assert storage.save("old", 3) is True
        assert set(storage.get_all()) == {"a", "b"}

    def test_ties_keep_earlier_entries(self, store: FakeKeyValueStore) -> None:
        frozen = StepClock(step=timedelta(0))
        storage = ProjectStorage(store, KEY, 2, clock=frozen)
        for name in ("a", "b", "c"):
            storage.save(name, name)
        assert list(storage.get_all()) == ["a", "b"]

    def test_unparseable_timestamps_rank_oldest(
        self, store: FakeKeyValueStore, clock: StepClock
    ) -> None:
        storage = _storage(store, clock, max_items=2)
        imported = {
            "junk": 5,
            "future": {"name": "future", "timestamp": "2030-01-01T00:00:00.000Z"},
            "blank": {"name": "blank"},
        }
        assert storage.import_json(json.dumps(imported)).success
        storage.save("now", 1)
        assert set(storage.get_all()) == {"future", "now"}


class TestReads:
    def test_get_all_missing_key(self, store: FakeKeyValueStore, clock: StepClock) -> None:
        assert _storage(store, clock).get_all() == {}

    def test_get_missing_name(self, store: FakeKeyValueStore, clock: StepClock) -> None:
        storage = _storage(store, clock)
        storage.save("a", 1)
        assert storage.get("b") is None

    def test_malformed_blob_logs_and_returns_empty(
        self, store: FakeKeyValueStore, clock: StepClock, caplog: pytest.LogCaptureFixture
    ) -> None:
        store.set(KEY, "{not json")
        storage = _storage(store, clock)
        with caplog.at_level(logging.WARNING):
            assert storage.get_all() == {}
        assert KEY in caplog.text

    def test_non_object_blob_reads_as_empty(
        self, store: FakeKeyValueStore, clock: StepClock
    ) -> None:
        store.set(KEY, "[1, 2, 3]")
        assert _storage(store, clock).get_all() == {}

    def test_save_over_malformed_blob_starts_fresh(
        self, store: FakeKeyValueStore, clock: StepClock
    ) -> None:
        store.set(KEY, "garbage")
        storage = _storage(store, clock)
        storage.save("a", 1)
        assert list(storage.get_all()) == ["a"]

    def test_names_newest_first(self, store: FakeKeyValueStore, clock: StepClock) -> None:
        storage = _storage(store, clock)
        for name in ("a", "b", "c"):
            storage.save(name, name)
        storage.save("a", "again")
        assert storage.names() == ["a", "c", "b"]


class TestDeleteAndClear:
    def test_delete(self, store: FakeKeyValueStore, clock: StepClock) -> None:
        storage = _storage(store, clock)
        storage.save("a", 1)
        storage.save("b", 2)
        assert storage.delete("a") is True
        assert list(storage.get_all()) == ["b"]

    def test_delete_missing_still_persists(
        self, store: FakeKeyValueStore, clock: StepClock
    ) -> None:
        storage = _storage(store, clock)
        assert storage.delete("nope") is True
        assert store.writes == [KEY]
        assert store.get(KEY) == "{}"

    def test_clear_removes_key(self, store: FakeKeyValueStore, clock: StepClock) -> None:
        storage = _storage(store, clock)
        storage.save("a", 1)
        assert storage.clear() is True
        assert store.get(KEY) is None
        assert storage.get_all() == {}


class TestExportImport:
    def test_export_is_indented(self, store: FakeKeyValueStore, clock: StepClock) -> None:
        storage = _storage(store, clock)
        storage.save("a", {"k": "v"})
        exported = storage.export()
        assert exported.startswith('{\n  "a": {\n    "id": ')
        assert json.loads(exported) == storage.get_all()

    def test_round_trip_empty(self, store: FakeKeyValueStore, clock: StepClock) -> None:
        source = _storage(store, clock)
        target = ProjectStorage(store, "other-key", clock=clock)
        assert target.import_json(source.export()).success
        assert target.get_all() == {}

    def test_round_trip_ignores_cap(self, store: FakeKeyValueStore, clock: StepClock) -> None:
        source = _storage(store, clock)
        for i in range(5):
            source.save(f"p{i}", {"i": i, "label": "नमस्ते"})
        target = ProjectStorage(store, "small", max_items=2, clock=clock)

        result = target.import_json(source.export())

        assert result.success is True
        assert result.error is None
        assert target.get_all() == source.get_all()

    def test_next_save_after_import_applies_cap(
        self, store: FakeKeyValueStore, clock: StepClock
    ) -> None:
        source = _storage(store, clock)
        for i in range(5):
            source.save(f"p{i}", i)
        target = ProjectStorage(store, "small", max_items=2, clock=clock)
        target.import_json(source.export())
        target.save("latest", 1)
        assert set(target.get_all()) == {"p4", "latest"}

    def test_invalid_json_leaves_data_untouched(
        self, store: FakeKeyValueStore, clock: StepClock
    ) -> None:
        storage = _storage(store, clock)
        storage.save("a", 1)
        before = store.get(KEY)

        result = storage.import_json("not json")

        assert result.success is False
        assert result.error
        assert store.get(KEY) == before

    @pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_constant_is_rejected(
        self, store: FakeKeyValueStore, clock: StepClock, constant: str
    ) -> None:
        storage = _storage(store, clock)
        storage.save("a", 1)
        before = store.get(KEY)

        result = storage.import_json(f'{{"a": {{"data": {constant}}}}}')

        assert result.success is False
        assert constant in result.error
        assert store.get(KEY) == before
        assert storage.get("a")["data"] == 1

    def test_write_failure_returns_failure(
        self, store: FakeKeyValueStore, clock: StepClock
    ) -> None:
        storage = _storage(store, clock)
        store.fail_writes = True
        result = storage.import_json('{"a": {}}')
        assert result.success is False
        assert "quota" in result.error


class TestStats:
    def test_empty(self, store: FakeKeyValueStore, clock: StepClock) -> None:
        stats = _storage(store, clock).get_stats()
        assert stats.count == 0
        assert stats.size_kb == "0.00"

    def test_counts_utf8_bytes(self, store: FakeKeyValueStore, clock: StepClock) -> None:
        storage = _storage(store, clock)
        storage.save("a", "é" * 600)
        storage.save("b", 2)
        stats = storage.get_stats()
        raw = store.get(KEY)
        assert stats.count == 2
        assert stats.size_kb == f"{len(raw.encode('utf-8')) / 1024:.2f}"
