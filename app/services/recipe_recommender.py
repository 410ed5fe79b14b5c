"""
Language model service for recipe recommendations.

Key design:
- The model is asked for a JSON array of three recipes.
- Markdown code fences around the answer are tolerated.
- If the answer still does not parse into recipes, one canned placeholder
  recipe is returned instead of an error. Failures of the call itself are
  errors (``LLMError``).
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional

from google import genai
from google.genai import types
from pydantic import ValidationError

from app.config import settings
from app.models.recipe import Recipe, RecommendRequest
from app.utils.exceptions import LLMError
from app.utils.json_repair import parse_json_array

logger = logging.getLogger(__name__)

RECIPE_COUNT = 3

SYSTEM_PROMPT = (
    "You are a professional chef specialized in creating delicious recipes from "
    "available ingredients. You excel at suggesting creative combinations and "
    "clear instructions."
)

PREP_TIME_RANGES = {
    "quick": "under 30 minutes",
    "medium": "between 30 and 60 minutes",
    "long": "over 60 minutes",
}

PLACEHOLDER_RECIPE = Recipe(
    title="Error generating recipes",
    description="We encountered an issue generating recipes. Please try again later.",
    preparationTime="N/A",
    complexity="N/A",
    ingredients=["Could not generate recipe"],
    instructions=["Could not generate instructions"],
    image="https://via.placeholder.com/400x300?text=Recipe+Unavailable",
)


def build_recommendation_prompt(request: RecommendRequest) -> str:
    lines = [
        f"Generate {RECIPE_COUNT} creative, chef-quality recipes using only these "
        f"ingredients: {', '.join(request.ingredients)}."
    ]
    if request.complexity != "any":
        lines.append(f"The recipes should be of {request.complexity} complexity.")
    if request.prepTime != "any":
        lines.append(f"The recipes should take {PREP_TIME_RANGES[request.prepTime]} to prepare.")

    lines.append(
        """For each recipe, provide:
1. A descriptive title
2. A brief description that highlights the main flavors
3. Preparation time
4. Complexity level (easy, medium, or hard)
5. List of ingredients with measurements
6. Step-by-step cooking instructions
7. A suggested image URL that would represent this dish

Format the response as a valid JSON array with objects containing the following fields:
title, description, preparationTime, complexity, ingredients (array), instructions (array), image (URL string)"""
    )
    return "\n".join(lines)


def parse_recipes(text: str) -> List[Recipe]:
    """Parse model output into recipes, or the placeholder when it does not parse."""
    try:
        items = parse_json_array(text)
        return [Recipe.model_validate(item) for item in items]
    except (ValueError, ValidationError) as e:
        logger.error(f"Failed to parse model response as recipes: {str(e)}")
        return [PLACEHOLDER_RECIPE.model_copy()]


class RecipeRecommender:
    """Recipe suggestions from Gemini."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None) -> None:
        self._api_key = api_key or settings.gemini_api_key
        self.model = model or settings.gemini_model
        self._client: Optional[genai.Client] = None

    @property
    def client(self) -> genai.Client:
        """Get or create Gemini client (lazy initialization)."""
        if self._client is None:
            if not self._api_key:
                raise LLMError("GEMINI_API_KEY is not configured")
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    async def recommend(self, request: RecommendRequest) -> List[Recipe]:
        prompt = build_recommendation_prompt(request)
        logger.info(
            "Requesting recipe recommendations",
            extra={
                "ingredient_count": len(request.ingredients),
                "complexity": request.complexity,
                "prep_time": request.prepTime,
            },
        )
        text = await self._generate(prompt)
        return parse_recipes(text)

    async def _generate(self, prompt: str) -> str:
        def _sync_call() -> Any:
            return self.client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    system_instruction=SYSTEM_PROMPT,
                    temperature=settings.gemini_temperature,
                    max_output_tokens=settings.gemini_max_tokens,
                ),
            )

        try:
            resp = await asyncio.to_thread(_sync_call)
        except LLMError:
            raise
        except Exception as e:
            logger.error(f"Recipe recommendation call failed: {str(e)}", exc_info=True)
            raise LLMError(f"Failed to generate recipe recommendations: {str(e)}") from e

        text = getattr(resp, "text", None) or ""
        logger.debug("Gemini raw response:\n%s", text)
        return text


_recommender: Optional[RecipeRecommender] = None


def get_recipe_recommender() -> RecipeRecommender:
    global _recommender
    if _recommender is None:
        _recommender = RecipeRecommender()
    return _recommender
