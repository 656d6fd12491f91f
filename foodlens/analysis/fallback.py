# -*- coding: utf-8 -*-
"""Analysis: same-shape fallback results returned instead of raising."""

from __future__ import annotations

from typing import List

from .errors import is_api_key_error
from .models import Confidence, FoodAnalysisResult, NutritionData


def _fallback(
    *,
    food_name: str,
    description: str,
    ingredients: List[str],
    health_insights: List[str],
    error: str,
) -> FoodAnalysisResult:
    return FoodAnalysisResult(
        food_name=food_name,
        description=description,
        confidence=Confidence.low,
        nutrition=NutritionData(),
        ingredients=ingredients,
        health_insights=health_insights,
        dietary_tags=[],
        serving_size="Unknown",
        preparation_method="Unable to determine",
        error=error or "Unknown error occurred",
    )


def image_fallback(error: str) -> FoodAnalysisResult:
    return _fallback(
        food_name="Food Analysis Unavailable",
        description="Unable to analyze the food image at this time. Please check your API configuration.",
        ingredients=["Analysis unavailable"],
        health_insights=[
            "Food analysis is currently unavailable",
            "Please ensure your GEMINI_API_KEY is properly configured",
            "Try again in a few moments",
        ],
        error=error,
    )


def search_fallback(food_name: str, error: str) -> FoodAnalysisResult:
    if is_api_key_error(error):
        return _fallback(
            food_name="API Key Required",
            description=(
                "To use food search, please add your GEMINI_API_KEY to the server environment. "
                "You can get a free API key from Google AI Studio (ai.google.dev)."
            ),
            ingredients=["API key required"],
            health_insights=[
                "Add your GEMINI_API_KEY to enable food search",
                "Get a free API key from Google AI Studio (ai.google.dev)",
                "Try again after adding the API key",
            ],
            error=error,
        )
    return _fallback(
        food_name=f"{food_name} - Analysis Unavailable",
        description=f'Unable to analyze "{food_name}" at this time. Please try again.',
        ingredients=["Analysis unavailable"],
        health_insights=[
            "Food search is currently unavailable",
            "Please ensure your API key is properly configured",
            "Try again after adding the API key",
        ],
        error=error,
    )
