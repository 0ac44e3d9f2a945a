"""Tests for the legacy index, titles, tracker and storage backends."""
import json
import logging

import pytest

from persona_politics.legacy import (
    LEGACY_KEY,
    LegacyTracker,
    compute_legacy_index,
    legacy_title,
)
from persona_politics.storage import JsonFileStore, KeyValueStore, MemoryStore


class TestLegacyIndex:
    def test_seed_state(self):
        index = compute_legacy_index(50, 50, 50, 100, 6)
        assert index == pytest.approx(42.698, abs=1e-3)
        assert legacy_title(index) == "Disgraced Official"

    def test_strong_stats_at_seed_economy(self):
        """Stats of 70 with a seed economy land in the pragmatic band."""
        # 42 + 17.143 - 4.444 by the index formula; below the statesman band.
        index = compute_legacy_index(70, 70, 70, 100, 6)
        assert index == pytest.approx(54.698, abs=1e-3)
        assert legacy_title(index) == "Pragmatic Politician"

    def test_respected_statesman(self):
        index = compute_legacy_index(85, 85, 85, 120, 5)
        assert index == pytest.approx(76.238, abs=1e-3)
        assert legacy_title(index) == "Respected Statesman"

    def test_clamped(self):
        assert compute_legacy_index(100, 100, 100, 140, 2) == 100
        assert compute_legacy_index(0, 0, 0, 70, 20) == 0

    @pytest.mark.parametrize("index, title", [
        (100, "Visionary Leader"),
        (85, "Visionary Leader"),
        (84.99, "Respected Statesman"),
        (70, "Respected Statesman"),
        (50, "Pragmatic Politician"),
        (49.99, "Disgraced Official"),
        (0, "Disgraced Official"),
    ])
    def test_title_thresholds(self, index, title):
        assert legacy_title(index) == title


class FailingStore:
    def get(self, key):
        return None

    def set(self, key, value):
        raise OSError("disk full")


class TestLegacyTracker:
    def test_defaults(self):
        tracker = LegacyTracker()
        assert tracker.best_index == 0
        assert tracker.best_title is None

    def test_higher_index_is_persisted(self):
        store = MemoryStore()
        tracker = LegacyTracker(store)
        assert tracker.record(60.5, t=30)
        assert tracker.best_title == "Pragmatic Politician"
        assert json.loads(store.get(LEGACY_KEY)) == {
            "bestIndex": 60.5,
            "bestTitle": "Pragmatic Politician",
        }

    def test_lower_or_equal_index_keeps_best(self):
        store = MemoryStore()
        tracker = LegacyTracker(store)
        tracker.record(60.0, t=1)
        assert not tracker.record(60.0, t=2)
        assert not tracker.record(40.0, t=3)
        assert tracker.best_index == 60.0
        assert json.loads(store.get(LEGACY_KEY))["bestIndex"] == 60.0
        assert [p[1] for p in tracker.history] == [60.0, 60.0, 40.0]

    def test_history_is_capped(self):
        tracker = LegacyTracker()
        for t in range(50):
            tracker.record(float(t), t)
        assert len(tracker.history) == 40

    def test_loads_existing_record(self):
        store = MemoryStore({LEGACY_KEY: json.dumps({"bestIndex": 77.0, "bestTitle": "Respected Statesman"})})
        tracker = LegacyTracker(store)
        assert tracker.best_index == 77.0
        assert tracker.best_title == "Respected Statesman"

    def test_corrupt_record_falls_back(self, caplog):
        store = MemoryStore({LEGACY_KEY: "{not json"})
        with caplog.at_level(logging.ERROR, logger="persona_politics.legacy"):
            tracker = LegacyTracker(store)
        assert tracker.best_index == 0
        assert tracker.best_title is None
        assert "Failed to load" in caplog.text

    def test_failed_save_keeps_in_memory_best(self, caplog):
        tracker = LegacyTracker(FailingStore())
        with caplog.at_level(logging.ERROR, logger="persona_politics.legacy"):
            assert tracker.record(80.0, t=5)
        assert tracker.best_index == 80.0
        assert "Failed to save" in caplog.text


class TestStores:
    def test_memory_store_conforms(self):
        assert isinstance(MemoryStore(), KeyValueStore)
        assert isinstance(JsonFileStore("x.json"), KeyValueStore)

    def test_json_file_store_roundtrip(self, tmp_path):
        path = tmp_path / "legacy.json"
        store = JsonFileStore(path)
        assert store.get("k") is None
        store.set("k", "v")
        store.set("other", "w")
        assert JsonFileStore(path).get("k") == "v"
        assert json.loads(path.read_text()) == {"k": "v", "other": "w"}
        assert not (tmp_path / "legacy.json.tmp").exists()

    def test_json_file_store_rejects_non_object(self, tmp_path):
        path = tmp_path / "legacy.json"
        path.write_text("[1, 2]")
        with pytest.raises(ValueError):
            JsonFileStore(path).get("k")

    def test_tracker_survives_restart_with_file(self, tmp_path):
        path = tmp_path / "legacy.json"
        LegacyTracker(JsonFileStore(path)).record(72.0, t=10)
        again = LegacyTracker(JsonFileStore(path))
        assert again.best_index == 72.0
        assert again.best_title == "Respected Statesman"
