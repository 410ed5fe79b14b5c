"""Shared API dependencies."""

from databases import Database
from fastapi import Depends

from app.db.database import get_database
from app.repositories.photos import PhotoRepository
from app.repositories.recipes import RecipeRepository


def get_recipe_repository(db: Database = Depends(get_database)) -> RecipeRepository:
    """Get recipe repository bound to the app database."""
    return RecipeRepository(db)


def get_photo_repository(db: Database = Depends(get_database)) -> PhotoRepository:
    """Get photo repository bound to the app database."""
    return PhotoRepository(db)
