"""Team-scoped photo records."""

import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from databases import Database

from app.db.database import database_errors, row_to_dict
from app.models.photo import Photo
from app.utils.exceptions import DatabaseError

logger = logging.getLogger(__name__)

# A user sees a photo only through membership of the photo's team.
GET_PHOTO = """
SELECT p.* FROM photos p
JOIN team_memberships tm ON p.teamId = tm.teamId
WHERE p.id = :id
  AND tm.userId = :user_id
  AND p.deletedAt IS NULL
"""

LIST_TEAM_PHOTOS = """
SELECT p.* FROM photos p
JOIN team_memberships tm ON p.teamId = tm.teamId
WHERE p.teamId = :team_id
  AND tm.userId = :user_id
  AND p.deletedAt IS NULL
ORDER BY p.updatedAt DESC
"""

LIST_LOG_PHOTOS = """
SELECT p.* FROM photos p
JOIN team_memberships tm ON p.teamId = tm.teamId
WHERE p.logId = :log_id
  AND tm.userId = :user_id
  AND p.deletedAt IS NULL
ORDER BY p.updatedAt DESC
"""

GET_LOG_TEAM = """
SELECT l.teamId FROM logs l
JOIN team_memberships tm ON l.teamId = tm.teamId
WHERE l.id = :log_id AND tm.userId = :user_id AND l.deletedAt IS NULL
"""

CREATE_PHOTO = """
INSERT INTO photos (
    id, teamId, creatorId, filename, imageId, logId,
    contentType, size, metadata, createdAt, updatedAt
) VALUES (
    :id, :team_id, :creator_id, :filename, :image_id, :log_id,
    :content_type, :size, :metadata, :now, :now
)
"""

MOVE_PHOTO = "UPDATE photos SET logId = :log_id, updatedAt = :now WHERE id = :id"

SOFT_DELETE_PHOTO = """
UPDATE photos SET deletedAt = :now, updatedAt = :now
WHERE id = :id AND deletedAt IS NULL
"""

DEFAULT_CONTENT_TYPE = "image/jpeg"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class PhotoRepository:
    """Photos repository."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def get(self, photo_id: str, user_id: str) -> Optional[Photo]:
        with database_errors("fetch photo"):
            row = await self.db.fetch_one(GET_PHOTO, values={"id": photo_id, "user_id": user_id})
        return Photo(**row_to_dict(row)) if row is not None else None

    async def list_for_team(self, team_id: str, user_id: str) -> List[Photo]:
        with database_errors("list photos"):
            rows = await self.db.fetch_all(
                LIST_TEAM_PHOTOS, values={"team_id": team_id, "user_id": user_id}
            )
        return [Photo(**row_to_dict(row)) for row in rows]

    async def list_for_log(self, log_id: str, user_id: str) -> List[Photo]:
        with database_errors("list log photos"):
            rows = await self.db.fetch_all(
                LIST_LOG_PHOTOS, values={"log_id": log_id, "user_id": user_id}
            )
        return [Photo(**row_to_dict(row)) for row in rows]

    async def get_log_team(self, log_id: str, user_id: str) -> Optional[str]:
        """Team of ``log_id`` if the log is live and the user belongs to that team."""
        with database_errors("look up log"):
            row = await self.db.fetch_one(GET_LOG_TEAM, values={"log_id": log_id, "user_id": user_id})
        return row_to_dict(row)["teamId"] if row is not None else None

    async def create(
        self,
        *,
        team_id: str,
        user_id: str,
        image_id: str,
        filename: str,
        log_id: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Photo:
        stored_metadata = dict(metadata or {})
        stored_metadata["uploadedBy"] = user_id

        content_type = str(stored_metadata.get("filetype") or DEFAULT_CONTENT_TYPE)
        size = stored_metadata.get("filesize")
        if isinstance(size, bool) or not isinstance(size, int):
            size = 0

        photo_id = f"photo_{uuid.uuid4().hex}"
        logger.info(
            "Saving photo record",
            extra={"photo_id": photo_id, "team_id": team_id, "log_id": log_id},
        )
        with database_errors("save photo"):
            await self.db.execute(
                CREATE_PHOTO,
                values={
                    "id": photo_id,
                    "team_id": team_id,
                    "creator_id": user_id,
                    "filename": filename,
                    "image_id": image_id,
                    "log_id": log_id,
                    "content_type": content_type,
                    "size": size,
                    "metadata": json.dumps(stored_metadata),
                    "now": _now(),
                },
            )

        photo = await self.get(photo_id, user_id)
        if photo is None:
            # Inserted under the log's team; the user is a member, so this only
            # happens if the membership vanished in between.
            raise DatabaseError("Failed to retrieve newly created photo")
        return photo

    async def soft_delete(self, photo_id: str) -> None:
        with database_errors("delete photo"):
            await self.db.execute(SOFT_DELETE_PHOTO, values={"id": photo_id, "now": _now()})

    async def move_to_log(self, photo_id: str, log_id: Optional[str]) -> None:
        """Attach the photo to ``log_id``, or detach it when ``log_id`` is None."""
        with database_errors("move photo"):
            await self.db.execute(
                MOVE_PHOTO, values={"id": photo_id, "log_id": log_id, "now": _now()}
            )
