# -*- coding: utf-8 -*-
"""Client: on-device key/value storage backed by a single JSON file."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import settings

logger = logging.getLogger(__name__)

STORAGE_FILENAME = "storage.json"


class LocalStorage:
    """``localStorage``-style access: whole document read and written per call."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = path or settings.data_root / STORAGE_FILENAME

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("local storage at %s is unreadable, treating as empty: %s", self.path, exc)
            return {}
        if not isinstance(raw, dict):
            logger.warning("local storage at %s is not an object, treating as empty", self.path)
            return {}
        return raw

    def _write(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")

    def get_item(self, key: str) -> Any:
        return self._read().get(key)

    def set_item(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)
