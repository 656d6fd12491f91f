# -*- coding: utf-8 -*-
"""Food analysis: prompts, the Gemini call and response parsing."""

from .models import Confidence, FoodAnalysisResult, HistoryEntry, NutritionData
from .service import analyze_food_image, search_food

__all__ = [
    "Confidence",
    "FoodAnalysisResult",
    "HistoryEntry",
    "NutritionData",
    "analyze_food_image",
    "search_food",
]
