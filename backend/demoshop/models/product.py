from enum import Enum
from pydantic import BaseModel, Field


class ProductCategory(str, Enum):
    """Catalog categories used by the seed data."""
    ELECTRONICS = "Electronics"
    CLOTHING = "Clothing"
    BOOKS = "Books"
    COFFEE = "Coffee"


DEFAULT_PRODUCT_IMAGE = (
    "data:image/svg+xml;base64,PHN2ZyB4bWxucz0iaHR0cDovL3d3dy53My5vcmcvMjAwMC9zdmciIHdpZHRoPSIzMDAiIGhlaWdodD0iMjAwIj48cmVjdCB3aWR0aD0iMzAwIiBoZWlnaHQ9IjIwMCIgZmlsbD0iI2NjYyIvPjx0ZXh0IHg9IjUwJSIgeT0iNTAlIiBmb250LWZhbWlseT0iQXJpYWwiIGZvbnQtc2l6ZT0iMjAiIGZpbGw9IndoaXRlIiB0ZXh0LWFuY2hvcj0ibWlkZGxlIiBkb21pbmFudC1iYXNlbGluZT0ibWlkZGxlIj5Qcm9kdWN0PC90ZXh0Pjwvc3ZnPg=="
)


class Product(BaseModel):
    """Catalog product as stored in MongoDB and served by the API."""
    id: str = Field(alias="_id")
    name: str
    category: str
    price: float = Field(ge=0)
    description: str
    image: str = DEFAULT_PRODUCT_IMAGE
    in_stock: bool = Field(True, alias="inStock")
    
    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "_id": "65a1f0c2e4b0a1b2c3d4e5f6",
                "name": "Espresso Blend",
                "category": "Coffee",
                "price": 14.99,
                "description": "Rich and bold espresso coffee beans",
                "image": "data:image/svg+xml;base64,...",
                "inStock": True
            }
        }
