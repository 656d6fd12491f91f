# -*- coding: utf-8 -*-
"""Analysis: prompt text sent to the model."""

from __future__ import annotations

_NUTRITION_SCHEMA = """\
  "nutrition": {
    "calories": 250,
    "protein_g": 15,
    "fat_g": 8,
    "carbs_g": 30,
    "sugar_g": 5,
    "fiber_g": 3,
    "sodium_mg": 400,
    "calcium_mg": 100,
    "iron_mg": 2
  },"""

_INSIGHTS_AND_TAGS = """\
  "health_insights": [
    "Detailed health benefit or concern",
    "Nutritional highlight",
    "Dietary consideration"
  ],
  "dietary_tags": ["vegetarian", "gluten-free", "high-protein", "etc"],"""


IMAGE_ANALYSIS_PROMPT = (
    "You are an expert nutritionist and food analyst. Analyze this food image in detail "
    "and return ONLY valid JSON with this exact structure:\n"
    "{\n"
    '  "food_name": "Specific name of the food item(s) identified",\n'
    '  "description": "Detailed description of what you see in the image, including cooking method, '
    'ingredients visible, portion size, and presentation",\n'
    '  "confidence": "High/Medium/Low - your confidence in the identification",\n'
    f"{_NUTRITION_SCHEMA}\n"
    '  "ingredients": ["list", "of", "visible", "ingredients"],\n'
    f"{_INSIGHTS_AND_TAGS}\n"
    '  "serving_size": "Estimated serving size description",\n'
    '  "preparation_method": "How the food appears to be prepared"\n'
    "}\n"
    "\n"
    "Important:\n"
    "- Analyze the actual food in the image carefully\n"
    "- Provide realistic nutrition estimates based on what you see\n"
    "- Be specific about ingredients and preparation methods visible\n"
    "- Return only the JSON object, no additional text or formatting\n"
    "- If you're unsure about something, indicate it in the confidence level\n"
)


def build_search_prompt(food_name: str) -> str:
    return (
        f'You are an expert nutritionist and food analyst. Analyze the food item "{food_name}" '
        "and return ONLY valid JSON with this exact structure:\n"
        "{\n"
        '  "food_name": "Specific name of the food item",\n'
        '  "description": "Detailed description of the food, including typical preparation methods, '
        'common ingredients, and nutritional characteristics",\n'
        '  "confidence": "High/Medium/Low - your confidence in the nutritional data",\n'
        f"{_NUTRITION_SCHEMA}\n"
        '  "ingredients": ["list", "of", "typical", "ingredients"],\n'
        f"{_INSIGHTS_AND_TAGS}\n"
        '  "serving_size": "Standard serving size description (e.g., \'1 medium apple\', \'100g cooked\')",\n'
        '  "preparation_method": "Common preparation methods for this food"\n'
        "}\n"
        "\n"
        "Important:\n"
        f'- Provide accurate nutrition data for a standard serving of "{food_name}"\n'
        "- Be specific about typical ingredients and preparation methods\n"
        "- Include relevant dietary tags and health insights\n"
        "- Return only the JSON object, no additional text or formatting\n"
        "- If the food name is unclear, make reasonable assumptions and indicate in confidence level\n"
        "- Base nutrition values on commonly available versions of this food\n"
    )
