"""Single recipe endpoints: /api/recipes/{recipe_id}."""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from app.api.dependencies import get_recipe_repository
from app.api.request_body import read_json_body
from app.middleware.auth import get_current_user_id
from app.models.recipe import UpdateRecipe
from app.models.schema import RequestSchema
from app.repositories.recipes import RecipeRepository
from app.utils.exceptions import NotFoundError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/recipes/{recipe_id}", tags=["recipes"])

PutSchema = UpdateRecipe


class DeleteSchema(RequestSchema):
    id: str


@router.get("")
async def GET(
    recipe_id: str,
    user_id: str = Depends(get_current_user_id),
    recipes: RecipeRepository = Depends(get_recipe_repository),
) -> Dict[str, Any]:
    recipe = await recipes.get(recipe_id, user_id)
    if recipe is None:
        raise NotFoundError("Recipe not found")
    return {"recipe": recipe.model_dump()}


@router.put("")
async def PUT(
    recipe_id: str,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    recipes: RecipeRepository = Depends(get_recipe_repository),
) -> Dict[str, Any]:
    """Update the fields present in the body."""
    body = await read_json_body(request)
    data = PutSchema.parse(body)

    if not await recipes.exists(recipe_id, user_id):
        raise NotFoundError("Recipe not found")

    await recipes.update(recipe_id, user_id, data)
    logger.info("Recipe updated", extra={"recipe_id": recipe_id})
    return {"success": True}


@router.delete("")
async def DELETE(
    recipe_id: str,
    user_id: str = Depends(get_current_user_id),
    recipes: RecipeRepository = Depends(get_recipe_repository),
) -> Dict[str, Any]:
    data = DeleteSchema.parse({"id": recipe_id})

    if not await recipes.exists(data.id, user_id):
        raise NotFoundError("Recipe not found")

    await recipes.delete(data.id, user_id)
    logger.info("Recipe deleted", extra={"recipe_id": data.id})
    return {"success": True}
