# -*- coding: utf-8 -*-
"""Analysis: failure taxonomy caught at the handler boundary."""

from __future__ import annotations

API_KEY_ENV = "GEMINI_API_KEY"


class FoodAnalysisError(RuntimeError):
    """Base class for failures that are turned into a fallback result."""


class MissingApiKeyError(FoodAnalysisError):
    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or f"{API_KEY_ENV} environment variable is not set")


class ModelCallError(FoodAnalysisError):
    """Network, timeout, quota or an error payload from the model API."""


class ModelOutputError(FoodAnalysisError):
    """The model replied but no usable JSON object could be extracted."""


def is_api_key_error(message: str) -> bool:
    return API_KEY_ENV in message
