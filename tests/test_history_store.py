# -*- coding: utf-8 -*-

from __future__ import annotations

import shutil
import tempfile
import unittest
from pathlib import Path

from foodlens.analysis.fallback import search_fallback
from foodlens.analysis.models import FoodAnalysisResult
from foodlens.client.history import HISTORY_KEY, MAX_HISTORY, HistoryStore, RecentSearches
from foodlens.client.storage import LocalStorage
from tests.helpers import BANANA


class _StoreTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = Path(tempfile.mkdtemp(prefix="foodlens-test-"))
        self.storage = LocalStorage(self._tmp / "storage.json")

    def tearDown(self) -> None:
        shutil.rmtree(self._tmp, ignore_errors=True)


class TestHistoryStore(_StoreTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.store = HistoryStore(self.storage)
        self.result = FoodAnalysisResult.model_validate(BANANA)

    def test_append_is_newest_first(self) -> None:
        self.store.append(self.result, search_query="banana", timestamp=1)
        self.store.append(self.result, image="data:image/jpeg;base64,AA", timestamp=2)
        entries = self.store.entries()
        self.assertEqual([e.timestamp for e in entries], [2, 1])
        self.assertEqual(entries[0].image, "data:image/jpeg;base64,AA")
        self.assertEqual(entries[1].search_query, "banana")
        self.assertEqual(entries[1].food_name, "Banana")

    def test_keeps_only_most_recent_twenty(self) -> None:
        for ts in range(1, 26):
            self.store.append(self.result, search_query=f"q{ts}", timestamp=ts)
        entries = self.store.entries()
        self.assertEqual(len(entries), MAX_HISTORY)
        self.assertEqual([e.timestamp for e in entries], list(range(25, 5, -1)))

    def test_remove_by_timestamp(self) -> None:
        for ts in (10, 20, 30):
            self.store.append(self.result, search_query="banana", timestamp=ts)
        before = [e.model_dump() for e in self.store.entries()]

        self.assertTrue(self.store.remove(20))
        after = [e.model_dump() for e in self.store.entries()]
        self.assertEqual(len(after), 2)
        self.assertEqual(after, [before[0], before[2]])

    def test_colliding_timestamps_stay_individually_removable(self) -> None:
        first = self.store.append(self.result, search_query="a", timestamp=1000)
        second = self.store.append(self.result, search_query="b", timestamp=1000)
        self.store.append(self.result, search_query="c", timestamp=2000)
        self.assertEqual(first.timestamp, 1000)
        self.assertNotEqual(second.timestamp, 1000)
        self.assertEqual(len(set(e.timestamp for e in self.store.entries())), 3)

        self.assertTrue(self.store.remove(1000))
        remaining = self.store.entries()
        self.assertEqual(len(remaining), 2)
        self.assertEqual([e.search_query for e in remaining], ["c", "b"])

    def test_remove_unknown_timestamp_is_noop(self) -> None:
        self.store.append(self.result, search_query="banana", timestamp=10)
        before = self.storage.get_item(HISTORY_KEY)
        self.assertFalse(self.store.remove(999))
        self.assertEqual(self.storage.get_item(HISTORY_KEY), before)

    def test_clear(self) -> None:
        self.store.append(self.result, search_query="banana", timestamp=10)
        self.store.clear()
        self.assertEqual(self.store.entries(), [])
        self.assertIsNone(self.storage.get_item(HISTORY_KEY))

    def test_fallback_results_are_recorded(self) -> None:
        fallback = search_fallback("banana", "GEMINI_API_KEY environment variable is not set")
        entry = self.store.append(fallback, search_query="banana", timestamp=5)
        self.assertTrue(entry.is_fallback)
        self.assertTrue(self.store.entries()[0].is_fallback)

    def test_corrupt_storage_reads_as_empty(self) -> None:
        self.storage.path.write_text("{not json", encoding="utf-8")
        with self.assertLogs("foodlens.client.storage", level="WARNING"):
            self.assertEqual(self.store.entries(), [])
        self.store.append(self.result, search_query="banana", timestamp=1)
        self.assertEqual(len(self.store.entries()), 1)

    def test_invalid_entries_are_skipped(self) -> None:
        self.storage.set_item(HISTORY_KEY, [{"food_name": "no timestamp"}, "junk", dict(BANANA, timestamp=7)])
        with self.assertLogs("foodlens.client.history", level="WARNING"):
            entries = self.store.entries()
        self.assertEqual([e.timestamp for e in entries], [7])

    def test_entry_cannot_carry_image_and_query(self) -> None:
        with self.assertRaises(ValueError):
            self.store.append(self.result, image="data:,", search_query="banana", timestamp=1)


class TestRecentSearches(_StoreTestCase):
    def test_dedupes_and_moves_to_front(self) -> None:
        recent = RecentSearches(self.storage)
        recent.add("Apple")
        recent.add("Banana")
        recent.add("Apple")
        self.assertEqual(recent.items(), ["Apple", "Banana"])

    def test_capped_at_ten_and_ignores_blank(self) -> None:
        recent = RecentSearches(self.storage)
        for i in range(12):
            recent.add(f"food {i}")
        recent.add("   ")
        items = recent.items()
        self.assertEqual(len(items), 10)
        self.assertEqual(items[0], "food 11")
        self.assertNotIn("food 0", items)

    def test_shares_storage_with_history(self) -> None:
        recent = RecentSearches(self.storage)
        recent.add("Rice")
        HistoryStore(self.storage).append(FoodAnalysisResult.model_validate(BANANA), search_query="Rice", timestamp=1)
        self.assertEqual(recent.items(), ["Rice"])
        recent.clear()
        self.assertEqual(recent.items(), [])
        self.assertEqual(len(HistoryStore(self.storage)), 1)


if __name__ == "__main__":
    unittest.main()
