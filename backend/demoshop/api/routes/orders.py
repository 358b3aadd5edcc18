import logging
from typing import List
from fastapi import APIRouter, Depends, Query, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from demoshop.api.deps import get_db
from demoshop.models.order import Order, OrderStatus
from demoshop.schemas.order import OrderCreate, OrderCreatedResponse
from demoshop.utils.helpers import format_document, get_current_timestamp

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=OrderCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    order: OrderCreate,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Create a new order from a cart snapshot.
    
    Items and total are stored as submitted; the order starts out pending.
    """
    now = get_current_timestamp()
    order_data = {
        **order.model_dump(by_alias=True, exclude_none=True),
        "status": OrderStatus.PENDING.value,
        "createdAt": now,
        "updatedAt": now
    }
    
    result = await db.orders.insert_one(order_data)
    order_data["_id"] = result.inserted_id
    logger.info(f"Created order {result.inserted_id} ({len(order.items)} items, total {order.total_amount:.2f})")
    
    return OrderCreatedResponse(
        success=True,
        order=Order.model_validate(format_document(order_data))
    )


@router.get("", response_model=List[Order])
async def get_orders(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Get orders, newest first.
    """
    orders = await db.orders.find().sort("createdAt", -1).skip(skip).limit(limit).to_list(length=limit)
    
    return [Order.model_validate(format_document(order)) for order in orders]
