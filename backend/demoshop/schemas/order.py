from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from demoshop.models.order import Order, OrderItem


class OrderCreate(BaseModel):
    """Schema for creating an order (server-side validation)."""
    items: List[OrderItem] = Field(min_length=1)
    total_amount: float = Field(ge=0, alias="totalAmount")
    
    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "items": [
                    {"productId": "65a1f0c2e4b0a1b2c3d4e5f6", "name": "Espresso Blend", "price": 14.99, "quantity": 2},
                    {
                        "productId": "custom-coffee-1700000000000-1a2b3c4d",
                        "name": "Custom Coffee",
                        "price": 5.25,
                        "quantity": 1,
                        "customCoffee": {"sugar": 1, "milk": "oat", "coffee": 2, "chocolate": 0}
                    }
                ],
                "totalAmount": 35.23
            }
        }


class CartOrderItem(BaseModel):
    """Order line as sent by the storefront; the customization is passed through untouched."""
    product_id: str = Field(alias="productId")
    name: str
    price: float
    quantity: int
    customization: Optional[Dict[str, Any]] = Field(None, alias="customCoffee")
    
    class Config:
        populate_by_name = True


class CartOrder(BaseModel):
    """Order payload built from a cart snapshot."""
    items: List[CartOrderItem]
    total_amount: float = Field(alias="totalAmount")
    
    class Config:
        populate_by_name = True


class OrderCreatedResponse(BaseModel):
    """Schema for the order creation response."""
    success: bool = True
    order: Order
