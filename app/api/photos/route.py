"""Photo record endpoints: /api/photos.

Images are uploaded by the client straight to the image service (see
``upload_url``); these endpoints store and serve the records that tie an
image to a team log.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse

from app.api.dependencies import get_photo_repository
from app.api.request_body import read_json_body
from app.middleware.auth import get_current_user_id
from app.models.photo import CreatePhoto, MovePhoto, PhotoId, PhotoWithUrl
from app.repositories.photos import PhotoRepository
from app.services.image_service import ImageService, get_image_service
from app.utils.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/photos", tags=["photos"])

PostSchema = CreatePhoto
PatchSchema = MovePhoto
DeleteSchema = PhotoId


def invalid_input(errors: Dict[str, Any]) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid input", "errors": errors},
    )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=None)
async def POST(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    photos: PhotoRepository = Depends(get_photo_repository),
) -> Union[Dict[str, Any], JSONResponse]:
    """Save the record for an image the client just uploaded."""
    body = await read_json_body(request)
    result = PostSchema.safeParse(body)
    if not result.success:
        return invalid_input(result.error.format())

    data = result.data
    logger.info(
        "Received photo data",
        extra={
            "image_id": data.imageId,
            "log_id": data.logId,
            "metadata_keys": sorted(data.metadata) if data.metadata else [],
        },
    )

    # The photo belongs to the log's team, not the uploader's default team.
    team_id = await photos.get_log_team(data.logId, user_id)
    if team_id is None:
        raise NotFoundError("Log not found or you do not have access to it")

    photo = await photos.create(
        team_id=team_id,
        user_id=user_id,
        image_id=data.imageId,
        filename=data.filename,
        log_id=data.logId,
        metadata=data.metadata,
    )
    logger.info("Photo saved", extra={"photo_id": photo.id})
    return photo.model_dump()


@router.get("")
async def GET(
    photo_id: Optional[str] = Query(None, alias="id"),
    log_id: Optional[str] = Query(None, alias="logId"),
    team_id: Optional[str] = Query(None, alias="teamId"),
    user_id: str = Depends(get_current_user_id),
    photos: PhotoRepository = Depends(get_photo_repository),
    images: ImageService = Depends(get_image_service),
) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
    """One photo by ``id``, or every photo of ``logId`` or ``teamId``; each with a signed URL."""
    if photo_id:
        photo = await photos.get(photo_id, user_id)
        if photo is None:
            raise NotFoundError("Photo not found or you do not have access")
        return PhotoWithUrl(**photo.model_dump(), url=images.signed_url(photo.imageId)).model_dump()

    if log_id:
        listed = await photos.list_for_log(log_id, user_id)
    elif team_id:
        listed = await photos.list_for_team(team_id, user_id)
    else:
        raise ValidationError("Team ID or log ID is required")

    return [
        PhotoWithUrl(**photo.model_dump(), url=images.signed_url(photo.imageId)).model_dump()
        for photo in listed
    ]


@router.patch("", response_model=None)
async def PATCH(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    photos: PhotoRepository = Depends(get_photo_repository),
) -> Union[Dict[str, Any], JSONResponse]:
    """Move a photo to another log, or unassign it with ``"logId": null``."""
    body = await read_json_body(request)
    result = PatchSchema.safeParse(body)
    if not result.success:
        return invalid_input(result.error.format())

    data = result.data
    photo = await photos.get(data.id, user_id)
    if photo is None:
        raise NotFoundError("Photo not found or you do not have access")

    if data.logId and await photos.get_log_team(data.logId, user_id) is None:
        raise NotFoundError("Log not found or you do not have access")

    await photos.move_to_log(photo.id, data.logId)
    logger.info("Photo moved", extra={"photo_id": photo.id, "log_id": data.logId})
    return {"success": True}


@router.delete("", response_model=None)
async def DELETE(
    photo_id: Optional[str] = Query(None, alias="id"),
    user_id: str = Depends(get_current_user_id),
    photos: PhotoRepository = Depends(get_photo_repository),
) -> Union[Dict[str, Any], JSONResponse]:
    """Soft delete a photo record; the hosted image is left in place."""
    result = DeleteSchema.safeParse({"id": photo_id})
    if not result.success:
        return invalid_input(result.error.format())

    photo = await photos.get(result.data.id, user_id)
    if photo is None:
        raise NotFoundError("Photo not found or you do not have access")

    await photos.soft_delete(photo.id)
    return {"success": True}
