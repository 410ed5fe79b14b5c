"""Pytest configuration and fixtures."""

from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from app.api.dependencies import get_photo_repository, get_recipe_repository
from app.main import app
from app.middleware.auth import get_current_user_id
from app.models.photo import Photo
from app.models.recipe import CreateRecipe, Recipe, StoredRecipe, UpdateRecipe
from app.services.identity import get_identity_provider
from app.services.image_service import ImageService, get_image_service
from app.services.recipe_recommender import get_recipe_recommender
from app.utils.exceptions import ImageServiceError

TEST_USER = "user_123"
OTHER_USER = "user_456"


class FakeRecipeRepository:
    """In-memory stand-in for RecipeRepository."""

    def __init__(self) -> None:
        self.rows: Dict[str, StoredRecipe] = {}
        self.counter = 0

    async def list_for_user(self, user_id: str) -> List[StoredRecipe]:
        return [r for r in self.rows.values() if r.userId == user_id]

    async def get(self, recipe_id: str, user_id: str) -> Optional[StoredRecipe]:
        recipe = self.rows.get(recipe_id)
        return recipe if recipe and recipe.userId == user_id else None

    async def exists(self, recipe_id: str, user_id: str) -> bool:
        return await self.get(recipe_id, user_id) is not None

    async def create(self, user_id: str, data: CreateRecipe) -> str:
        self.counter += 1
        recipe_id = f"recipe_{self.counter:08d}"
        self.rows[recipe_id] = StoredRecipe(
            id=recipe_id,
            userId=user_id,
            createdAt="2026-01-01T00:00:00+00:00",
            updatedAt="2026-01-01T00:00:00+00:00",
            **data.model_dump(),
        )
        return recipe_id

    async def update(self, recipe_id: str, user_id: str, data: UpdateRecipe) -> None:
        current = self.rows[recipe_id]
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        self.rows[recipe_id] = current.model_copy(
            update={**changes, "updatedAt": "2026-01-02T00:00:00+00:00"}
        )

    async def delete(self, recipe_id: str, user_id: str) -> None:
        self.rows.pop(recipe_id, None)


class FakePhotoRepository:
    """In-memory stand-in for PhotoRepository; the test user belongs to team_1 only."""

    def __init__(self) -> None:
        self.photos: Dict[str, Photo] = {}
        self.members = {("team_1", TEST_USER)}
        self.logs = {"log_1": "team_1", "log_2": "team_1", "log_9": "team_9"}
        self.moves: List[tuple] = []
        self.deleted: List[str] = []

    def _visible(self, photo: Photo, user_id: str) -> bool:
        return photo.deletedAt is None and (photo.teamId, user_id) in self.members

    async def get(self, photo_id: str, user_id: str) -> Optional[Photo]:
        photo = self.photos.get(photo_id)
        return photo if photo and self._visible(photo, user_id) else None

    async def list_for_team(self, team_id: str, user_id: str) -> List[Photo]:
        return [
            p for p in self.photos.values() if p.teamId == team_id and self._visible(p, user_id)
        ]

    async def list_for_log(self, log_id: str, user_id: str) -> List[Photo]:
        return [
            p for p in self.photos.values() if p.logId == log_id and self._visible(p, user_id)
        ]

    async def get_log_team(self, log_id: str, user_id: str) -> Optional[str]:
        team_id = self.logs.get(log_id)
        return team_id if (team_id, user_id) in self.members else None

    async def create(self, *, team_id, user_id, image_id, filename, log_id, metadata=None) -> Photo:
        photo = Photo(
            id=f"photo_{len(self.photos) + 1}",
            teamId=team_id,
            creatorId=user_id,
            filename=filename,
            imageId=image_id,
            logId=log_id,
            contentType=(metadata or {}).get("filetype", "image/jpeg"),
            size=(metadata or {}).get("filesize", 0),
            createdAt="2026-01-01T00:00:00+00:00",
            updatedAt="2026-01-01T00:00:00+00:00",
        )
        self.photos[photo.id] = photo
        return photo

    async def soft_delete(self, photo_id: str) -> None:
        self.deleted.append(photo_id)
        self.photos[photo_id] = self.photos[photo_id].model_copy(
            update={"deletedAt": "2026-01-03T00:00:00+00:00"}
        )

    async def move_to_log(self, photo_id: str, log_id: Optional[str]) -> None:
        self.moves.append((photo_id, log_id))
        self.photos[photo_id] = self.photos[photo_id].model_copy(update={"logId": log_id})


class FakeImageService(ImageService):
    def __init__(self) -> None:
        super().__init__(
            account_id="acct",
            account_hash="hash123",
            api_token="token",
            signing_key="signing-key",
        )
        self.fail_uploads = False
        self.upload_metadata: Optional[dict] = None

    async def create_direct_upload(self, metadata):
        self.upload_metadata = metadata
        if self.fail_uploads:
            raise ImageServiceError("Failed to get upload URL")
        return {"uploadURL": "https://upload.example.com/abc", "imageId": "img_abc"}


class FakeRecommender:
    def __init__(self) -> None:
        self.requests = []

    async def recommend(self, request):
        self.requests.append(request)
        return [
            Recipe(
                title="Garlic Rice",
                description="Fragrant and simple",
                preparationTime="20 minutes",
                complexity="easy",
                ingredients=["1 cup rice", "2 cloves garlic"],
                instructions=["Cook rice", "Fry garlic", "Combine"],
            )
        ]


class FakeIdentityProvider:
    def __init__(self, user_id: Optional[str] = None) -> None:
        self.user_id = user_id

    async def authenticate(self, token: str) -> Optional[str]:
        return self.user_id if token == "valid-token" else None


@pytest.fixture
def recipe_repo():
    return FakeRecipeRepository()


@pytest.fixture
def photo_repo():
    return FakePhotoRepository()


@pytest.fixture
def image_service():
    return FakeImageService()


@pytest.fixture
def recommender():
    return FakeRecommender()


@pytest.fixture
def client(recipe_repo, photo_repo, image_service, recommender):
    """Test client with the caller authenticated as TEST_USER."""
    app.dependency_overrides[get_current_user_id] = lambda: TEST_USER
    app.dependency_overrides[get_recipe_repository] = lambda: recipe_repo
    app.dependency_overrides[get_photo_repository] = lambda: photo_repo
    app.dependency_overrides[get_image_service] = lambda: image_service
    app.dependency_overrides[get_recipe_recommender] = lambda: recommender
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(recipe_repo, photo_repo):
    """Test client going through the real auth dependency with a fake provider."""
    app.dependency_overrides[get_identity_provider] = lambda: FakeIdentityProvider(TEST_USER)
    app.dependency_overrides[get_recipe_repository] = lambda: recipe_repo
    app.dependency_overrides[get_photo_repository] = lambda: photo_repo
    yield TestClient(app)
    app.dependency_overrides.clear()
