"""Recipe collection endpoints: /api/recipes."""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, status

from app.api.dependencies import get_recipe_repository
from app.api.request_body import read_json_body
from app.middleware.auth import get_current_user_id
from app.models.recipe import CreateRecipe
from app.repositories.recipes import RecipeRepository

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/recipes", tags=["recipes"])

PostSchema = CreateRecipe


@router.get("")
async def GET(
    user_id: str = Depends(get_current_user_id),
    recipes: RecipeRepository = Depends(get_recipe_repository),
) -> Dict[str, Any]:
    """List the caller's saved recipes."""
    items = await recipes.list_for_user(user_id)
    return {"recipes": [recipe.model_dump() for recipe in items]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def POST(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    recipes: RecipeRepository = Depends(get_recipe_repository),
) -> Dict[str, Any]:
    """Save a recipe to the caller's collection."""
    body = await read_json_body(request)
    data = PostSchema.parse(body)

    recipe_id = await recipes.create(user_id, data)
    return {"success": True, "recipeId": recipe_id}
