"""Photo Pydantic models."""

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field

from app.models.schema import RequestSchema


class Photo(BaseModel):
    """Photo record; the image itself lives in the image service."""

    id: str
    teamId: str
    creatorId: str
    filename: str
    imageId: Optional[str] = None
    logId: Optional[str] = None
    contentType: str
    size: int = 0
    metadata: Optional[str] = None
    createdAt: str
    updatedAt: str
    deletedAt: Optional[str] = None


class PhotoWithUrl(Photo):
    url: str = ""


class CreatePhoto(RequestSchema):
    """Body sent after the client finished a direct upload."""

    imageId: str
    filename: str
    logId: str
    metadata: Optional[Dict[str, Any]] = None


class PhotoId(RequestSchema):
    id: str = Field(..., min_length=1)


class MovePhoto(RequestSchema):
    """Body for moving a photo to another log; ``logId`` null unassigns it."""

    id: str = Field(..., min_length=1)
    logId: Optional[str] = None
