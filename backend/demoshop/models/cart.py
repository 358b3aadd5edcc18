from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class CartItem(BaseModel):
    """Line item held in the storefront cart."""
    id: str = Field(alias="_id")
    name: str
    price: float = Field(ge=0)
    image: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    quantity: int = Field(ge=1)
    customization: Optional[Dict[str, Any]] = Field(None, alias="customCoffee")
    
    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "_id": "custom-coffee-1700000000000-1a2b3c4d",
                "name": "Custom Coffee",
                "price": 5.25,
                "quantity": 1,
                "customCoffee": {"sugar": 2, "milk": "oat", "coffee": 2, "chocolate": 0}
            }
        }
    
    @property
    def is_customized(self) -> bool:
        """Whether the item carries a non-empty customization."""
        return bool(self.customization)
    
    @property
    def subtotal(self) -> float:
        return self.price * self.quantity
