"""Signed delivery URL for one photo: /api/photos/signed-url."""

from typing import Dict, Optional

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_photo_repository
from app.middleware.auth import get_current_user_id
from app.repositories.photos import PhotoRepository
from app.services.image_service import DEFAULT_VARIANT, ImageService, get_image_service
from app.utils.exceptions import NotFoundError, ValidationError

router = APIRouter(prefix="/api/photos/signed-url", tags=["photos"])


@router.get("")
async def GET(
    photo_id: Optional[str] = Query(None, alias="id"),
    variant: str = Query(DEFAULT_VARIANT),
    user_id: str = Depends(get_current_user_id),
    photos: PhotoRepository = Depends(get_photo_repository),
    images: ImageService = Depends(get_image_service),
) -> Dict[str, str]:
    if not photo_id:
        raise ValidationError("Photo ID is required")

    photo = await photos.get(photo_id, user_id)
    if photo is None:
        raise NotFoundError("Photo not found")
    if not photo.imageId:
        raise NotFoundError("Photo has no associated image")

    return {"url": images.signed_url(photo.imageId, variant or DEFAULT_VARIANT)}
