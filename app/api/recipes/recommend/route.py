"""Recipe recommendations from the language model: /api/recipes/recommend."""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from app.api.request_body import read_json_body
from app.middleware.auth import get_current_user_id
from app.middleware.rate_limit import RECOMMEND_LIMIT, limiter
from app.models.recipe import RecommendRequest
from app.services.recipe_recommender import RecipeRecommender, get_recipe_recommender

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/recipes/recommend", tags=["recipes"])

PostSchema = RecommendRequest


@router.post("")
@limiter.limit(RECOMMEND_LIMIT)
async def POST(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    recommender: RecipeRecommender = Depends(get_recipe_recommender),
) -> Dict[str, Any]:
    """
    Suggest recipes for the submitted ingredients.

    - **ingredients**: non-empty list of ingredient names
    - **complexity**: any, easy, medium or hard (default any)
    - **prepTime**: any, quick, medium or long (default any)
    """
    body = await read_json_body(request)
    data = PostSchema.parse(body)

    recipes = await recommender.recommend(data)
    return {"recipes": [recipe.model_dump() for recipe in recipes]}
