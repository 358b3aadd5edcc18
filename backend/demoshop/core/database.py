"""
Process-wide MongoDB handle, opened and closed by the API lifespan.
"""
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from demoshop.core.config import settings

logger = logging.getLogger(__name__)

_client: Optional[AsyncIOMotorClient] = None
_database: Optional[AsyncIOMotorDatabase] = None


async def connect_to_mongo(
    uri: str = settings.MONGODB_URI,
    db_name: str = settings.MONGODB_DB_NAME
) -> AsyncIOMotorDatabase:
    """Open the shared client; a second call reuses the open connection."""
    global _client, _database
    if _database is not None:
        return _database

    _client = AsyncIOMotorClient(uri)
    _database = _client[db_name]
    logger.info(f"Using MongoDB database '{db_name}'")
    return _database


async def close_mongo_connection() -> None:
    global _client, _database
    if _client is None:
        return
    _client.close()
    _client = None
    _database = None
    logger.info("MongoDB connection closed")


def get_database() -> Optional[AsyncIOMotorDatabase]:
    """The open database, or None outside the API lifespan."""
    return _database
