"""One-time direct upload URL: /api/photos/upload-url."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Union

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.middleware.auth import get_current_user_id
from app.services.image_service import ImageService, get_image_service
from app.utils.exceptions import ImageServiceError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/photos/upload-url", tags=["photos"])


@router.get("", response_model=None)
async def GET(
    user_id: str = Depends(get_current_user_id),
    images: ImageService = Depends(get_image_service),
) -> Union[Dict[str, Any], JSONResponse]:
    metadata = {
        "userId": user_id,
        "uploadedAt": datetime.now(timezone.utc).isoformat(),
    }
    try:
        upload = await images.create_direct_upload(metadata)
    except ImageServiceError as e:
        logger.warning(f"Upload URL unavailable: {str(e)}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": str(e) or "Failed to get upload URL"},
        )

    return {"success": True, **upload}
