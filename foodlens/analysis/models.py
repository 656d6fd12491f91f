# -*- coding: utf-8 -*-
"""Analysis: Pydantic models shared by the service and the client."""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


_NUM_RE = re.compile(r"-?\d+(?:\.\d+)?")
_OPTIONAL_KEYS = ("timestamp", "image", "error", "search_query")


def coerce_number(value: Any) -> float:
    """Best-effort numeric coercion for model output ("250 kcal" -> 250.0, None -> 0)."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        m = _NUM_RE.search(value.replace(",", ""))
        if not m:
            return 0.0
        return float(m.group(0))
    raise ValueError(f"not a number: {value!r}")


def as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        s = value.strip()
        return [s] if s else []
    if isinstance(value, (list, tuple)):
        out: List[str] = []
        for x in value:
            if x is None:
                continue
            s = x.strip() if isinstance(x, str) else str(x).strip()
            if s:
                out.append(s)
        return out
    s = str(value).strip()
    return [s] if s else []


class Confidence(str, Enum):
    high = "High"
    medium = "Medium"
    low = "Low"

    @classmethod
    def parse(cls, value: Any) -> "Confidence":
        """Match on the leading word, e.g. "high - clear photo" -> High; unknown -> Low."""
        if isinstance(value, Confidence):
            return value
        if isinstance(value, str):
            words = re.findall(r"[A-Za-z]+", value)
            if words:
                head = words[0].lower()
                for member in cls:
                    if member.value.lower() == head:
                        return member
        return cls.low


class NutritionData(BaseModel):
    model_config = ConfigDict(extra="allow")

    calories: float = 0
    protein_g: float = 0
    fat_g: float = 0
    carbs_g: float = 0
    sugar_g: float = 0
    fiber_g: float = 0
    sodium_mg: float = 0
    calcium_mg: float = 0
    iron_mg: float = 0

    @field_validator("*", mode="before")
    @classmethod
    def _coerce(cls, value: object) -> float:
        return coerce_number(value)


class FoodAnalysisResult(BaseModel):
    """One analysis, success or fallback. ``error`` is only set on a fallback."""

    # Keep any extra keys the model emits so the response mirrors its output.
    model_config = ConfigDict(extra="allow")

    food_name: str = ""
    description: str = ""
    confidence: Confidence = Confidence.low
    nutrition: NutritionData = Field(default_factory=NutritionData)
    ingredients: List[str] = Field(default_factory=list)
    health_insights: List[str] = Field(default_factory=list)
    dietary_tags: List[str] = Field(default_factory=list)
    serving_size: str = ""
    preparation_method: str = ""
    timestamp: Optional[int] = None
    image: Optional[str] = None
    error: Optional[str] = None

    @field_validator("food_name", "description", "serving_size", "preparation_method", mode="before")
    @classmethod
    def _coerce_text(cls, value: object) -> str:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    @field_validator("confidence", mode="before")
    @classmethod
    def _coerce_confidence(cls, value: object) -> Confidence:
        return Confidence.parse(value)

    @field_validator("nutrition", mode="before")
    @classmethod
    def _coerce_nutrition(cls, value: object) -> object:
        return {} if value is None else value

    @field_validator("ingredients", "health_insights", mode="before")
    @classmethod
    def _coerce_lists(cls, value: object) -> List[str]:
        return as_str_list(value)

    @field_validator("dietary_tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value: object) -> List[str]:
        seen: set[str] = set()
        out: List[str] = []
        for tag in as_str_list(value):
            if tag not in seen:
                seen.add(tag)
                out.append(tag)
        return out

    @property
    def is_fallback(self) -> bool:
        return self.error is not None

    def to_payload(self) -> dict:
        data = self.model_dump(mode="json")
        for key in _OPTIONAL_KEYS:
            if data.get(key) is None:
                data.pop(key, None)
        return data


class HistoryEntry(FoodAnalysisResult):
    timestamp: int
    search_query: Optional[str] = None

    @model_validator(mode="after")
    def _single_source(self) -> "HistoryEntry":
        if self.image and self.search_query:
            raise ValueError("history entry carries either an image or a search query, not both")
        return self


class AnalyzeFoodRequest(BaseModel):
    image: Optional[Any] = Field(None, description="data:image/jpeg;base64,... URI")


class SearchFoodRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    food_name: Optional[Any] = Field(None, alias="foodName", description="Free-text food name")
