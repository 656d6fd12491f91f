# -*- coding: utf-8 -*-
"""Client: presentation helpers for results and history."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Iterable, Optional, Sequence, Tuple

from ..analysis.models import Confidence, FoodAnalysisResult

POPULAR_SEARCHES = (
    "Apple",
    "Banana",
    "Chicken breast",
    "Salmon",
    "Broccoli",
    "Rice",
    "Avocado",
    "Greek yogurt",
    "Almonds",
    "Sweet potato",
)

_MS_PER_HOUR = 1000 * 60 * 60
_MS_PER_DAY = _MS_PER_HOUR * 24


class Tone(str, Enum):
    good = "good"
    moderate = "moderate"
    caution = "caution"
    alert = "alert"
    neutral = "neutral"


# (upper threshold, tone above it, middle threshold, tone above it, tone otherwise)
_NUTRIENT_RULES: Dict[str, Tuple[float, Tone, float, Tone, Tone]] = {
    "calories": (400, Tone.caution, 200, Tone.moderate, Tone.good),
    "protein": (20, Tone.good, 10, Tone.moderate, Tone.caution),
    "fat": (15, Tone.caution, 8, Tone.moderate, Tone.good),
    "sugar": (15, Tone.alert, 8, Tone.caution, Tone.good),
    "sodium": (800, Tone.alert, 400, Tone.caution, Tone.good),
    "fiber": (5, Tone.good, 2, Tone.moderate, Tone.caution),
}


def format_nutrition_value(value: float, unit: str = "") -> str:
    return f"{value:g}{unit}"


def nutrient_tone(kind: str, value: float) -> Tone:
    rule = _NUTRIENT_RULES.get(kind)
    if rule is None:
        return Tone.neutral
    high, high_tone, mid, mid_tone, low_tone = rule
    if value > high:
        return high_tone
    if value > mid:
        return mid_tone
    return low_tone


def confidence_tone(confidence: Confidence | str) -> Tone:
    if not isinstance(confidence, Confidence):
        if confidence not in {c.value for c in Confidence}:
            return Tone.neutral
        confidence = Confidence(confidence)
    return {
        Confidence.high: Tone.good,
        Confidence.medium: Tone.moderate,
        Confidence.low: Tone.alert,
    }[confidence]


def _plural(n: int, word: str) -> str:
    return f"{n} {word}{'' if n == 1 else 's'} ago"


def format_relative_date(timestamp_ms: int, now_ms: Optional[int] = None) -> str:
    if now_ms is None:
        now_ms = int(datetime.now(timezone.utc).timestamp() * 1000)
    diff_ms = max(0, now_ms - timestamp_ms)
    if diff_ms < _MS_PER_HOUR:
        return _plural(diff_ms // 60_000, "minute")
    if diff_ms < 24 * _MS_PER_HOUR:
        return _plural(diff_ms // _MS_PER_HOUR, "hour")
    if diff_ms < 48 * _MS_PER_HOUR:
        return "Yesterday"
    return datetime.fromtimestamp(timestamp_ms / 1000).date().isoformat()


def history_stats(entries: Sequence[FoodAnalysisResult], now_ms: Optional[int] = None) -> Dict[str, int]:
    """Averages and counts shown under the history list."""
    total = len(entries)
    if total == 0:
        return {"avg_calories": 0, "avg_protein_g": 0, "total_scans": 0, "days_tracking": 0}
    if now_ms is None:
        now_ms = int(datetime.now(timezone.utc).timestamp() * 1000)
    stamps = [e.timestamp for e in entries if e.timestamp is not None]
    oldest = min(stamps) if stamps else now_ms
    return {
        "avg_calories": round(sum(e.nutrition.calories for e in entries) / total),
        "avg_protein_g": round(sum(e.nutrition.protein_g for e in entries) / total),
        "total_scans": total,
        "days_tracking": round((now_ms - oldest) / _MS_PER_DAY),
    }


def nutrition_rows(result: FoodAnalysisResult) -> Iterable[Tuple[str, str, Tone]]:
    """(label, formatted value, tone) for each nutrient, in display order."""
    n = result.nutrition
    yield "Calories", format_nutrition_value(n.calories), nutrient_tone("calories", n.calories)
    yield "Protein", format_nutrition_value(n.protein_g, "g"), nutrient_tone("protein", n.protein_g)
    yield "Fat", format_nutrition_value(n.fat_g, "g"), nutrient_tone("fat", n.fat_g)
    yield "Carbs", format_nutrition_value(n.carbs_g, "g"), nutrient_tone("carbs", n.carbs_g)
    yield "Sugar", format_nutrition_value(n.sugar_g, "g"), nutrient_tone("sugar", n.sugar_g)
    yield "Fiber", format_nutrition_value(n.fiber_g, "g"), nutrient_tone("fiber", n.fiber_g)
    yield "Sodium", format_nutrition_value(n.sodium_mg, "mg"), nutrient_tone("sodium", n.sodium_mg)
    yield "Calcium", format_nutrition_value(n.calcium_mg, "mg"), nutrient_tone("calcium", n.calcium_mg)
    yield "Iron", format_nutrition_value(n.iron_mg, "mg"), nutrient_tone("iron", n.iron_mg)
