from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from demoshop.api.deps import get_db
from demoshop.models.product import Product
from demoshop.schemas.product import ProductUpdate
from demoshop.utils.helpers import format_document, get_current_timestamp, parse_object_id

router = APIRouter()


def _product_object_id(product_id: str):
    object_id = parse_object_id(product_id)
    if object_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid product ID"
        )
    return object_id


@router.get("", response_model=List[Product])
async def get_products(
    category: Optional[str] = None,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Get all products, optionally restricted to one category.
    """
    query = {}
    if category:
        query["category"] = category
    
    products = await db.products.find(query).to_list(length=None)
    
    return [Product.model_validate(format_document(product)) for product in products]


@router.get("/categories/all", response_model=List[str])
async def get_categories(db: AsyncIOMotorDatabase = Depends(get_db)):
    """
    Get the distinct category names of the catalog.
    """
    categories = await db.products.distinct("category")
    return sorted(categories)


@router.get("/{product_id}", response_model=Product)
async def get_product(
    product_id: str,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Get a single product by ID.
    """
    product = await db.products.find_one({"_id": _product_object_id(product_id)})
    
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found"
        )
    
    return Product.model_validate(format_document(product))


@router.put("/{product_id}", response_model=Product)
async def update_product(
    product_id: str,
    product_update: ProductUpdate,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Update the price and/or stock availability of a product.
    """
    object_id = _product_object_id(product_id)
    
    update_data = product_update.model_dump(by_alias=True, exclude_none=True)
    if not update_data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No fields to update"
        )
    update_data["updatedAt"] = get_current_timestamp()
    
    product = await db.products.find_one_and_update(
        {"_id": object_id},
        {"$set": update_data},
        return_document=ReturnDocument.AFTER
    )
    
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found"
        )
    
    return Product.model_validate(format_document(product))
