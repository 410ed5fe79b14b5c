"""Recipe Pydantic models."""

from typing import List, Literal, Optional
from pydantic import BaseModel, Field

from app.models.schema import RequestSchema

Complexity = Literal["any", "easy", "medium", "hard"]
PrepTime = Literal["any", "quick", "medium", "long"]


class Recipe(BaseModel):
    """Recipe as suggested by the language model or saved by a user."""

    title: str = Field(..., description="Recipe title")
    description: str = Field("", description="Short description highlighting the main flavors")
    preparationTime: str = Field("", description="Preparation time, free text (e.g. '25 minutes')")
    complexity: str = Field("", description="easy, medium or hard")
    ingredients: List[str] = Field(default_factory=list, description="Ingredients with measurements")
    instructions: List[str] = Field(default_factory=list, description="Step-by-step instructions")
    image: Optional[str] = Field(None, description="Suggested image URL")


class StoredRecipe(Recipe):
    """Recipe row from a user's collection."""

    id: str
    userId: str
    createdAt: str
    updatedAt: str


class CreateRecipe(RequestSchema):
    """Body for saving a recipe to the caller's collection."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., max_length=2000)
    preparationTime: str = Field(..., min_length=1, max_length=100)
    complexity: str = Field(..., min_length=1, max_length=50)
    ingredients: List[str] = Field(..., min_length=1)
    instructions: List[str] = Field(..., min_length=1)
    image: Optional[str] = None


class UpdateRecipe(RequestSchema):
    """Partial update; only fields present in the body are written."""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    preparationTime: Optional[str] = Field(None, min_length=1, max_length=100)
    complexity: Optional[str] = Field(None, min_length=1, max_length=50)
    ingredients: Optional[List[str]] = None
    instructions: Optional[List[str]] = None
    image: Optional[str] = None


class RecommendRequest(RequestSchema):
    """Body for asking the language model for recipe ideas."""

    ingredients: List[str] = Field(..., min_length=1, max_length=50)
    complexity: Complexity = "any"
    prepTime: PrepTime = "any"
