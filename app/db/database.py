"""Database connection and table setup."""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from databases import Database

from app.config import settings
from app.utils.exceptions import DatabaseError

logger = logging.getLogger(__name__)

CREATE_TABLES = (
    """
    CREATE TABLE IF NOT EXISTS recipes (
        id VARCHAR(64) PRIMARY KEY,
        userId VARCHAR(128) NOT NULL,
        title VARCHAR(200) NOT NULL,
        description TEXT NOT NULL,
        preparationTime VARCHAR(100) NOT NULL,
        complexity VARCHAR(50) NOT NULL,
        ingredients TEXT NOT NULL,
        instructions TEXT NOT NULL,
        image TEXT,
        createdAt VARCHAR(40) NOT NULL,
        updatedAt VARCHAR(40) NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_recipes_user ON recipes (userId)",
    # Teams and logs are owned by another module; created here for local setups.
    """
    CREATE TABLE IF NOT EXISTS team_memberships (
        teamId VARCHAR(64) NOT NULL,
        userId VARCHAR(128) NOT NULL,
        PRIMARY KEY (teamId, userId)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS logs (
        id VARCHAR(64) PRIMARY KEY,
        teamId VARCHAR(64) NOT NULL,
        deletedAt VARCHAR(40)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS photos (
        id VARCHAR(64) PRIMARY KEY,
        teamId VARCHAR(64) NOT NULL,
        creatorId VARCHAR(128) NOT NULL,
        filename VARCHAR(512) NOT NULL,
        imageId VARCHAR(128),
        logId VARCHAR(64),
        contentType VARCHAR(100) NOT NULL,
        size INTEGER NOT NULL DEFAULT 0,
        metadata TEXT,
        createdAt VARCHAR(40) NOT NULL,
        updatedAt VARCHAR(40) NOT NULL,
        deletedAt VARCHAR(40)
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_photos_team ON photos (teamId)",
)

database = Database(settings.database_url)


def get_database() -> Database:
    return database


async def create_tables(db: Database) -> None:
    for statement in CREATE_TABLES:
        await db.execute(query=statement)


def row_to_dict(row: Any) -> Optional[Dict[str, Any]]:
    if row is None:
        return None
    return dict(row._mapping)


@contextmanager
def database_errors(action: str) -> Iterator[None]:
    """Log the store's error and raise a generic ``DatabaseError`` instead."""
    try:
        yield
    except DatabaseError:
        raise
    except Exception as e:
        logger.error(f"Database error while trying to {action}: {str(e)}", exc_info=True)
        raise DatabaseError(f"Failed to {action}") from e
