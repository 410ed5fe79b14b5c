"""Pydantic models."""

from app.models.photo import CreatePhoto, MovePhoto, Photo, PhotoId, PhotoWithUrl
from app.models.recipe import (
    CreateRecipe,
    Recipe,
    RecommendRequest,
    StoredRecipe,
    UpdateRecipe,
)
from app.models.schema import ParseResult, RequestSchema

__all__ = [
    "CreatePhoto",
    "CreateRecipe",
    "MovePhoto",
    "ParseResult",
    "Photo",
    "PhotoId",
    "PhotoWithUrl",
    "Recipe",
    "RecommendRequest",
    "RequestSchema",
    "StoredRecipe",
    "UpdateRecipe",
]
