from datetime import datetime, timezone
from typing import Optional
from bson import ObjectId


def object_id_to_str(obj_id) -> str:
    """Convert ObjectId to string."""
    if isinstance(obj_id, ObjectId):
        return str(obj_id)
    return obj_id


def parse_object_id(value: str) -> Optional[ObjectId]:
    """Parse a string into an ObjectId, or None when it is malformed."""
    if not ObjectId.is_valid(value):
        return None
    return ObjectId(value)


def format_document(document: dict) -> dict:
    """Format MongoDB document for API response (``_id`` kept as a string)."""
    if document and "_id" in document:
        document["_id"] = object_id_to_str(document["_id"])
    return document


def format_price(amount: float) -> str:
    """Display an amount in dollars, rounded to cents."""
    return f"${amount:.2f}"


def get_current_timestamp() -> datetime:
    """Get current UTC timestamp."""
    return datetime.now(timezone.utc)
