from typing import Optional
from pydantic import BaseModel, Field


class ProductUpdate(BaseModel):
    """Schema for the admin price/stock update."""
    price: Optional[float] = Field(None, ge=0)
    in_stock: Optional[bool] = Field(None, alias="inStock")
    
    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "price": 12.49,
                "inStock": False
            }
        }
