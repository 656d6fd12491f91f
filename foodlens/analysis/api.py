# -*- coding: utf-8 -*-
"""Analysis: API endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from .gemini import GeminiClient, get_gemini_client
from .models import AnalyzeFoodRequest, SearchFoodRequest
from .service import analyze_food_image, search_food

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Analysis"])


@router.post("/analyze-food", summary="Analyze a food photo")
def analyze_food(request: AnalyzeFoodRequest, client: GeminiClient = Depends(get_gemini_client)) -> dict:
    image = request.image
    if not image or not isinstance(image, str):
        raise HTTPException(status_code=400, detail="No image provided")
    try:
        return analyze_food_image(image, client).to_payload()
    except Exception as exc:
        logger.exception("analyze-food failed")
        raise HTTPException(status_code=500, detail="Failed to analyze food") from exc


@router.post("/search-food", summary="Look up typical nutrition for a food name")
def search(request: SearchFoodRequest, client: GeminiClient = Depends(get_gemini_client)) -> dict:
    food_name = request.food_name
    if not isinstance(food_name, str) or not food_name.strip():
        raise HTTPException(status_code=400, detail="No food name provided")
    try:
        return search_food(food_name.strip(), client).to_payload()
    except Exception as exc:
        logger.exception("search-food failed")
        raise HTTPException(status_code=500, detail="Failed to search food") from exc
