from fastapi import HTTPException, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from demoshop.core.database import get_database


async def get_db() -> AsyncIOMotorDatabase:
    """Dependency to get database instance."""
    db = get_database()
    if db is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database not connected"
        )
    return db
