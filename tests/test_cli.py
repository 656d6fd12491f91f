# -*- coding: utf-8 -*-

from __future__ import annotations

import io
import shutil
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

import httpx

from foodlens import cli
from foodlens.analysis.models import FoodAnalysisResult
from foodlens.client.history import HistoryStore, RecentSearches
from foodlens.client.storage import LocalStorage
from tests.helpers import BANANA


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = Path(tempfile.mkdtemp(prefix="foodlens-test-"))
        self.storage = LocalStorage(self._tmp / "storage.json")

    def tearDown(self) -> None:
        shutil.rmtree(self._tmp, ignore_errors=True)

    def _run(self, *argv: str) -> tuple[int, str]:
        out = io.StringIO()
        with redirect_stdout(out):
            code = cli.main(["--data-root", str(self._tmp), *argv])
        return code, out.getvalue()

    def test_history_listing_and_removal(self) -> None:
        store = HistoryStore(self.storage)
        result = FoodAnalysisResult.model_validate(BANANA)
        store.append(result, search_query="banana", timestamp=1_000)
        store.append(result, search_query="banana", timestamp=2_000)

        code, out = self._run("history")
        self.assertEqual(code, 0)
        self.assertIn("2 analyses saved", out)
        self.assertIn("Total scans: 2", out)

        code, out = self._run("history", "--remove", "1000")
        self.assertEqual(code, 0)
        self.assertEqual([e.timestamp for e in store.entries()], [2_000])

        code, out = self._run("history", "--clear", "--yes")
        self.assertIn("History cleared.", out)
        self.assertEqual(store.entries(), [])

    def test_recent_and_popular(self) -> None:
        RecentSearches(self.storage).add("Salmon")
        code, out = self._run("recent")
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "Salmon")

        code, out = self._run("popular")
        self.assertIn("Greek yogurt", out)

    def test_search_prints_result(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=BANANA))
        real_client = cli._client

        def client_with_transport(args):
            client = real_client(args)
            client._transport = transport
            return client

        with mock.patch.object(cli, "_client", side_effect=client_with_transport):
            code, out = self._run("search", "banana")
        self.assertEqual(code, 0)
        self.assertIn("Banana  [High confidence, good]", out)
        self.assertIn("Sodium", out)
        self.assertEqual(len(HistoryStore(self.storage)), 1)

    def test_analyze_missing_file(self) -> None:
        code, out = self._run("analyze", str(self._tmp / "nope.jpg"))
        self.assertEqual(code, 1)
        self.assertIn("Image not found", out)


if __name__ == "__main__":
    unittest.main()
