# -*- coding: utf-8 -*-
"""Client: bounded analysis history and recent searches in local storage."""

from __future__ import annotations

import logging
import time
from typing import Any, List, Optional

from pydantic import ValidationError

from ..analysis.models import FoodAnalysisResult, HistoryEntry
from .storage import LocalStorage

logger = logging.getLogger(__name__)

HISTORY_KEY = "foodHistory"
RECENT_SEARCHES_KEY = "recentFoodSearches"
MAX_HISTORY = 20
MAX_RECENT_SEARCHES = 10


def now_ms() -> int:
    return int(time.time() * 1000)


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


class HistoryStore:
    """Newest-first list of :class:`HistoryEntry`, capped at ``MAX_HISTORY``."""

    def __init__(self, storage: LocalStorage, *, limit: int = MAX_HISTORY) -> None:
        self.storage = storage
        self.limit = limit

    def _raw(self) -> List[Any]:
        return _as_list(self.storage.get_item(HISTORY_KEY))

    def entries(self) -> List[HistoryEntry]:
        out: List[HistoryEntry] = []
        for raw in self._raw():
            try:
                out.append(HistoryEntry.model_validate(raw))
            except ValidationError as exc:
                logger.warning("skipping unreadable history entry: %s", exc)
        return out

    def append(
        self,
        result: FoodAnalysisResult,
        *,
        image: Optional[str] = None,
        search_query: Optional[str] = None,
        timestamp: Optional[int] = None,
    ) -> HistoryEntry:
        history = self._raw()
        ts = timestamp if timestamp is not None else now_ms()
        # Timestamps key removal, so they must stay unique.
        taken = {item.get("timestamp") for item in history if isinstance(item, dict)}
        if ts in taken:
            ts = max(t for t in taken if isinstance(t, int)) + 1

        data = result.model_dump(mode="json")
        data.update(timestamp=ts, image=image, search_query=search_query)
        entry = HistoryEntry.model_validate(data)

        history.insert(0, entry.to_payload())
        self.storage.set_item(HISTORY_KEY, history[: self.limit])
        return entry

    def remove(self, timestamp: int) -> bool:
        history = self._raw()
        kept = [item for item in history if not (isinstance(item, dict) and item.get("timestamp") == timestamp)]
        if len(kept) == len(history):
            return False
        self.storage.set_item(HISTORY_KEY, kept)
        return True

    def clear(self) -> None:
        self.storage.remove_item(HISTORY_KEY)

    def __len__(self) -> int:
        return len(self._raw())


class RecentSearches:
    """Distinct recent queries, newest first, capped at ``MAX_RECENT_SEARCHES``."""

    def __init__(self, storage: LocalStorage, *, limit: int = MAX_RECENT_SEARCHES) -> None:
        self.storage = storage
        self.limit = limit

    def items(self) -> List[str]:
        return [s for s in _as_list(self.storage.get_item(RECENT_SEARCHES_KEY)) if isinstance(s, str)]

    def add(self, query: str) -> List[str]:
        query = query.strip()
        if not query:
            return self.items()
        updated = [query] + [s for s in self.items() if s != query]
        updated = updated[: self.limit]
        self.storage.set_item(RECENT_SEARCHES_KEY, updated)
        return updated

    def clear(self) -> None:
        self.storage.remove_item(RECENT_SEARCHES_KEY)
