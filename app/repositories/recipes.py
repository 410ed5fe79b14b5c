"""Per-user recipe collection."""

import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from databases import Database

from app.db.database import database_errors, row_to_dict
from app.models.recipe import CreateRecipe, StoredRecipe, UpdateRecipe

logger = logging.getLogger(__name__)

LIST_RECIPES = "SELECT * FROM recipes WHERE userId = :user_id ORDER BY createdAt DESC"

GET_RECIPE = "SELECT * FROM recipes WHERE id = :id AND userId = :user_id"

RECIPE_EXISTS = "SELECT id FROM recipes WHERE id = :id AND userId = :user_id"

CREATE_RECIPE = """
INSERT INTO recipes (
    id, userId, title, description, preparationTime, complexity,
    ingredients, instructions, image, createdAt, updatedAt
) VALUES (
    :id, :user_id, :title, :description, :preparation_time, :complexity,
    :ingredients, :instructions, :image, :created_at, :updated_at
)
"""

DELETE_RECIPE = "DELETE FROM recipes WHERE id = :id AND userId = :user_id"

JSON_COLUMNS = ("ingredients", "instructions")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def new_recipe_id() -> str:
    return f"recipe_{uuid.uuid4().hex[:8]}"


def _to_recipe(row: Dict[str, Any]) -> StoredRecipe:
    for column in JSON_COLUMNS:
        value = row.get(column)
        row[column] = json.loads(value) if value else []
    return StoredRecipe(**row)


class RecipeRepository:
    """Recipes repository; every query is scoped to the owning user."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_for_user(self, user_id: str) -> List[StoredRecipe]:
        with database_errors("list recipes"):
            rows = await self.db.fetch_all(LIST_RECIPES, values={"user_id": user_id})
        return [_to_recipe(row_to_dict(row)) for row in rows]

    async def get(self, recipe_id: str, user_id: str) -> Optional[StoredRecipe]:
        with database_errors("fetch recipe"):
            row = await self.db.fetch_one(GET_RECIPE, values={"id": recipe_id, "user_id": user_id})
        if row is None:
            return None
        return _to_recipe(row_to_dict(row))

    async def exists(self, recipe_id: str, user_id: str) -> bool:
        with database_errors("look up recipe"):
            row = await self.db.fetch_one(RECIPE_EXISTS, values={"id": recipe_id, "user_id": user_id})
        return row is not None

    async def create(self, user_id: str, data: CreateRecipe) -> str:
        recipe_id = new_recipe_id()
        timestamp = _now()
        with database_errors("create recipe"):
            await self.db.execute(
                CREATE_RECIPE,
                values={
                    "id": recipe_id,
                    "user_id": user_id,
                    "title": data.title,
                    "description": data.description,
                    "preparation_time": data.preparationTime,
                    "complexity": data.complexity,
                    "ingredients": json.dumps(data.ingredients),
                    "instructions": json.dumps(data.instructions),
                    "image": data.image or None,
                    "created_at": timestamp,
                    "updated_at": timestamp,
                },
            )
        logger.info("Recipe created", extra={"recipe_id": recipe_id})
        return recipe_id

    async def update(self, recipe_id: str, user_id: str, data: UpdateRecipe) -> None:
        """Write the fields present in ``data``; ``updatedAt`` is always bumped."""
        changes = data.model_dump(exclude_unset=True, exclude_none=True)

        # Column names come from the schema's fields, never from the request keys.
        assignments = []
        values: Dict[str, Any] = {"id": recipe_id, "user_id": user_id, "updated_at": _now()}
        for column, value in changes.items():
            assignments.append(f"{column} = :{column}")
            values[column] = json.dumps(value) if column in JSON_COLUMNS else value
        assignments.append("updatedAt = :updated_at")

        query = f"UPDATE recipes SET {', '.join(assignments)} WHERE id = :id AND userId = :user_id"
        with database_errors("update recipe"):
            await self.db.execute(query, values=values)

    async def delete(self, recipe_id: str, user_id: str) -> None:
        with database_errors("delete recipe"):
            await self.db.execute(DELETE_RECIPE, values={"id": recipe_id, "user_id": user_id})
