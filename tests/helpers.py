# -*- coding: utf-8 -*-
"""Shared fixtures for the test suite."""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List

import httpx

from foodlens.analysis.gemini import GeminiClient, GeminiSettings

TEST_SETTINGS = GeminiSettings(
    api_key="test-key",
    base_url="https://gemini.test/v1beta",
    model="gemini-test",
    timeout=5.0,
)

BANANA = {
    "food_name": "Banana",
    "description": "A ripe yellow banana, eaten raw.",
    "confidence": "High",
    "nutrition": {
        "calories": 105,
        "protein_g": 1.3,
        "fat_g": 0.4,
        "carbs_g": 27,
        "sugar_g": 14,
        "fiber_g": 3.1,
        "sodium_mg": 1,
        "calcium_mg": 6,
        "iron_mg": 0.3,
    },
    "ingredients": ["banana"],
    "health_insights": ["Good source of potassium", "Quick energy", "Naturally fat free"],
    "dietary_tags": ["vegan", "gluten-free"],
    "serving_size": "1 medium banana (118g)",
    "preparation_method": "Raw",
}


def gemini_body(text: str) -> Dict[str, Any]:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}, "finishReason": "STOP"}]}


def gemini_client(
    handler: Callable[[httpx.Request], httpx.Response],
    settings: GeminiSettings = TEST_SETTINGS,
) -> GeminiClient:
    return GeminiClient(settings, transport=httpx.MockTransport(handler))


def replying(text: str, captured: List[httpx.Request] | None = None) -> GeminiClient:
    """A client whose model always answers ``text``."""

    def handler(request: httpx.Request) -> httpx.Response:
        if captured is not None:
            captured.append(request)
        return httpx.Response(200, json=gemini_body(text))

    return gemini_client(handler)


def request_json(request: httpx.Request) -> Dict[str, Any]:
    return json.loads(request.content.decode("utf-8"))
