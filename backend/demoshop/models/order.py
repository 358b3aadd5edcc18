from datetime import datetime
from enum import Enum
from typing import List, Literal, Optional
from pydantic import BaseModel, Field


class OrderStatus(str, Enum):
    """Order status enumeration."""
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class CustomCoffee(BaseModel):
    """Option selections of a custom coffee order line, bounded like the builder."""
    sugar: int = Field(0, ge=0, le=5)
    milk: Literal["none", "regular", "oat"] = "none"
    coffee: int = Field(1, ge=1, le=4)
    chocolate: int = Field(0, ge=0, le=5)

    class Config:
        extra = "forbid"


class OrderItem(BaseModel):
    """Line of an order."""
    product_id: str = Field(alias="productId")
    name: str
    price: float = Field(ge=0)
    quantity: int = Field(gt=0)
    custom_coffee: Optional[CustomCoffee] = Field(None, alias="customCoffee")
    
    class Config:
        populate_by_name = True


class Order(BaseModel):
    """Order model for MongoDB."""
    id: Optional[str] = Field(None, alias="_id")
    items: List[OrderItem]
    total_amount: float = Field(ge=0, alias="totalAmount")
    status: OrderStatus = OrderStatus.PENDING
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")
    
    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "items": [
                    {
                        "productId": "65a1f0c2e4b0a1b2c3d4e5f6",
                        "name": "Espresso Blend",
                        "price": 14.99,
                        "quantity": 2
                    }
                ],
                "totalAmount": 29.98,
                "status": "pending"
            }
        }
