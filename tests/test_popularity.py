"""
Tests for the lock-guarded popularity tracker.
"""
import json
from concurrent.futures import ThreadPoolExecutor

import pytest

from torc.core.exceptions import StorageError
from torc.models import PopularityItem
from torc.services.popularity import PopularityTracker, sort_popularity


def as_pairs(items):
    return [(item.drink, item.count) for item in items]


class TestSnapshot:

    def test_missing_record_is_empty(self, tracker):
        assert tracker.snapshot() == []
        assert not tracker.path.exists()

    def test_ordering_count_desc_then_name(self, tracker):
        tracker.path.write_text(json.dumps({"counts": {"Latte": 3, "Mocha": 5, "Espresso": 5}}))
        assert as_pairs(tracker.snapshot()) == [("Espresso", 5), ("Mocha", 5), ("Latte", 3)]

    def test_sort_popularity_returns_items(self):
        assert sort_popularity({"b": 1, "a": 1, "c": 2}) == [
            PopularityItem(drink="c", count=2),
            PopularityItem(drink="a", count=1),
            PopularityItem(drink="b", count=1),
        ]

    def test_record_without_counts_key(self, tracker):
        tracker.path.write_text("{}")
        assert tracker.snapshot() == []


class TestIncrement:

    def test_creates_entry_at_one(self, tracker):
        assert tracker.increment("Latte") == 1
        assert json.loads(tracker.path.read_text()) == {"counts": {"Latte": 1}}

    def test_accumulates(self, tracker):
        for _ in range(3):
            tracker.increment("Latte")
        tracker.increment("Mocha")
        assert as_pairs(tracker.snapshot()) == [("Latte", 3), ("Mocha", 1)]

    def test_keys_are_case_sensitive(self, tracker):
        tracker.increment("Latte")
        tracker.increment("latte")
        assert as_pairs(tracker.snapshot()) == [("Latte", 1), ("latte", 1)]

    def test_record_is_world_readable(self, tracker):
        tracker.increment("Latte")
        assert tracker.path.stat().st_mode & 0o777 == 0o644

    def test_persists_across_instances(self, tracker):
        tracker.increment("Mocha")
        reopened = PopularityTracker(tracker.path)
        assert reopened.increment("Mocha") == 2

    def test_concurrent_increments_lose_nothing(self, tracker):
        with ThreadPoolExecutor(max_workers=16) as pool:
            list(pool.map(lambda _: tracker.increment("Latte"), range(100)))

        assert as_pairs(tracker.snapshot()) == [("Latte", 100)]

    def test_concurrent_increments_across_instances(self, tracker):
        """Two trackers on one file behave like two processes sharing it."""
        other = PopularityTracker(tracker.path, lock_timeout=5)
        trackers = [tracker, other] * 30
        drinks = ["Latte", "Mocha", "Espresso"]

        with ThreadPoolExecutor(max_workers=12) as pool:
            list(pool.map(
                lambda i: trackers[i].increment(drinks[i % 3]),
                range(len(trackers)),
            ))

        assert as_pairs(tracker.snapshot()) == [("Espresso", 20), ("Latte", 20), ("Mocha", 20)]

    def test_write_failure_is_storage_error(self, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        tracker = PopularityTracker(blocker / "popular.json")

        with pytest.raises(StorageError):
            tracker.increment("Latte")


class TestCorruptRecord:

    def test_corrupt_record_starts_over(self, tracker):
        tracker.path.write_text("{oops")
        assert tracker.snapshot() == []

    def test_corrupt_record_is_preserved(self, tracker):
        tracker.path.write_text("{oops")
        assert tracker.increment("Latte") == 1

        backups = list(tracker.path.parent.glob("popular.json.corrupt-*"))
        assert len(backups) == 1
        assert backups[0].read_text() == "{oops"
        assert json.loads(tracker.path.read_text()) == {"counts": {"Latte": 1}}

    def test_non_integer_counts_are_corrupt(self, tracker):
        tracker.path.write_text(json.dumps({"counts": {"Latte": "many"}}))
        assert tracker.snapshot() == []

    def test_negative_counts_are_corrupt(self, tracker):
        tracker.path.write_text(json.dumps({"counts": {"Latte": -1, "Mocha": 2}}))
        assert tracker.snapshot() == []
        assert list(tracker.path.parent.glob("popular.json.corrupt-*"))

    def test_invalid_utf8_record_starts_over(self, tracker):
        raw = b'\xff\xfe{"counts": {}}'
        tracker.path.write_bytes(raw)

        assert tracker.increment("Latte") == 1
        [backup] = tracker.path.parent.glob("popular.json.corrupt-*")
        assert backup.read_bytes() == raw
        assert as_pairs(tracker.snapshot()) == [("Latte", 1)]
