# -*- coding: utf-8 -*-
"""Client: drives the view state machine against the FoodLens service."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from ..analysis.models import FoodAnalysisResult
from ..config import settings
from .capture import CaptureSession
from .history import HistoryStore, RecentSearches
from .state import Failed, Navigate, Resolved, Submit, View, ViewState, update
from .storage import LocalStorage

logger = logging.getLogger(__name__)


class TransportError(RuntimeError):
    """The service could not be reached or returned a non-2xx/undecodable reply."""


class FoodLensClient:
    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        storage: Optional[LocalStorage] = None,
        timeout: float = 60.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or settings.server_url).rstrip("/")
        self.timeout = timeout
        self._transport = transport
        storage = storage or LocalStorage()
        self.history = HistoryStore(storage)
        self.recent_searches = RecentSearches(storage)
        self.capture = CaptureSession()
        self.state = ViewState()

    def dispatch(self, event: Any) -> ViewState:
        self.state = update(self.state, event)
        if isinstance(event, Navigate) and self.state.view is not View.camera:
            # Every exit from the camera view releases the stream.
            self.capture.stop()
        return self.state

    def go(self, view: View) -> ViewState:
        return self.dispatch(Navigate(view))

    def _post(self, path: str, body: Dict[str, Any]) -> FoodAnalysisResult:
        url = f"{self.base_url}{path}"
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                resp = client.post(url, json=body)
        except httpx.HTTPError as exc:
            raise TransportError(f"request to {url} failed: {exc}") from exc
        if resp.status_code >= 400:
            raise TransportError(f"{path} returned HTTP {resp.status_code}")
        try:
            return FoodAnalysisResult.model_validate(resp.json())
        except (ValueError, ValidationError) as exc:
            raise TransportError(f"{path} returned an unreadable body: {exc}") from exc

    def _run(self, path: str, body: Dict[str, Any], **history_source: Optional[str]) -> ViewState:
        self.dispatch(Submit())
        return self._request(path, body, **history_source)

    def _request(self, path: str, body: Dict[str, Any], **history_source: Optional[str]) -> ViewState:
        try:
            result = self._post(path, body)
        except TransportError as exc:
            logger.error("Analysis failed: %s", exc)
            return self.dispatch(Failed(str(exc)))

        self.dispatch(Resolved(result))
        if result.is_fallback:
            logger.warning("service returned a fallback result: %s", result.error)
        try:
            self.history.append(result, **history_source)
        except OSError as exc:
            logger.error("Failed to save to history: %s", exc)
        return self.state

    def analyze_image(self, image_data_uri: str) -> ViewState:
        """Submit from the camera view."""
        return self._run("/api/analyze-food", {"image": image_data_uri}, image=image_data_uri)

    def capture_and_analyze(self, source: Path | str) -> ViewState:
        """home/analysis -> camera -> analysis, releasing the capture stream on every path."""
        if self.state.view is not View.camera:
            self.go(View.camera)
        try:
            self.capture.start(source)
            image = self.capture.capture()
        finally:
            self.capture.stop()
        return self.analyze_image(image)

    def search(self, food_name: str) -> ViewState:
        """Submit from the search view."""
        query = food_name.strip()
        if not query:
            return self.state
        self.dispatch(Submit())
        self.recent_searches.add(query)
        return self._request("/api/search-food", {"foodName": query}, search_query=query)
