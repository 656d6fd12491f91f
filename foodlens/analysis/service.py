# -*- coding: utf-8 -*-
"""Analysis: prompt -> model -> JSON, with a fallback on any failure."""

from __future__ import annotations

import logging
import re
from typing import Optional, Tuple

from pydantic import ValidationError

from .errors import FoodAnalysisError, ModelOutputError
from .fallback import image_fallback, search_fallback
from .gemini import GeminiClient
from .models import FoodAnalysisResult
from .parsing import parse_model_json
from .prompts import IMAGE_ANALYSIS_PROMPT, build_search_prompt

logger = logging.getLogger(__name__)

_DATA_URI_RE = re.compile(r"^data:(image/[a-z0-9.+-]+);base64,", re.IGNORECASE)
DEFAULT_IMAGE_MIME = "image/jpeg"


def split_data_uri(image: str) -> Tuple[str, str]:
    """Return ``(mime, base64_payload)``; bare base64 is treated as JPEG."""
    m = _DATA_URI_RE.match(image)
    if not m:
        return DEFAULT_IMAGE_MIME, image
    return m.group(1).lower(), image[m.end() :]


def _result_from_text(text: str) -> FoodAnalysisResult:
    logger.info("Gemini API response received")
    logger.debug("Response text: %s...", text[:200])
    parsed = parse_model_json(text)
    try:
        result = FoodAnalysisResult.model_validate(parsed)
    except ValidationError as exc:
        raise ModelOutputError(f"Model output does not match the result schema: {exc}") from exc
    logger.info("Successfully parsed JSON response")
    return result


def analyze_food_image(image: str, client: Optional[GeminiClient] = None) -> FoodAnalysisResult:
    client = client or GeminiClient()
    mime, payload = split_data_uri(image)
    try:
        logger.info("Starting Gemini API call for image analysis (%s, %d chars)", mime, len(payload))
        text = client.generate(IMAGE_ANALYSIS_PROMPT, image_b64=payload, image_mime=mime)
        return _result_from_text(text)
    except FoodAnalysisError as exc:
        logger.warning("Image analysis failed, returning fallback: %s", exc, exc_info=True)
        return image_fallback(str(exc))


def search_food(food_name: str, client: Optional[GeminiClient] = None) -> FoodAnalysisResult:
    client = client or GeminiClient()
    try:
        logger.info("Starting Gemini API call for food search: %s", food_name)
        text = client.generate(build_search_prompt(food_name))
        return _result_from_text(text)
    except FoodAnalysisError as exc:
        logger.warning("Food search failed for %r, returning fallback: %s", food_name, exc, exc_info=True)
        return search_fallback(food_name, str(exc))
