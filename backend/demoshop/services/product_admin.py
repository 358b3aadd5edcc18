"""
Product admin: edit price and stock availability of catalog products.
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional

import requests

from demoshop.models.product import Product

logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Failed to load products"
UPDATE_FAILED_MESSAGE = "Failed to update product"
UPDATE_ERROR_MESSAGE = "Error updating product"

EDITABLE_FIELDS = ("price", "in_stock")


class ProductAdmin:
    """Admin panel state: product list, the product being edited, messages."""

    def __init__(self, client):
        self.client = client
        self.products: List[Product] = []
        self.editing: Optional[Dict[str, Any]] = None
        self.loading = True
        self.message: Optional[str] = None

    async def load(self) -> List[Product]:
        try:
            self.products = await asyncio.to_thread(self.client.get_products)
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Error fetching products: {str(e)}")
            self.message = LOAD_FAILED_MESSAGE
        finally:
            self.loading = False
        return self.products

    def begin_edit(self, product_id: str) -> Dict[str, Any]:
        """
        Start editing a copy of the product.

        Raises:
            KeyError: If the product is not in the loaded list
        """
        for product in self.products:
            if product.id == product_id:
                self.editing = product.model_dump()
                return self.editing
        raise KeyError(product_id)

    def change(self, field: str, value: Any) -> Dict[str, Any]:
        if self.editing is None:
            raise RuntimeError("No product is being edited")
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Field '{field}' is not editable")
        self.editing[field] = value
        return self.editing

    def cancel(self) -> None:
        self.editing = None

    async def save(self) -> bool:
        """PUT the edited price and stock flag; True when the server accepted it."""
        if self.editing is None:
            return False

        edited = self.editing
        try:
            response = await asyncio.to_thread(
                self.client.update_product,
                edited["id"],
                float(edited["price"]),
                bool(edited["in_stock"])
            )
        except requests.RequestException as e:
            logger.error(f"Error updating product: {str(e)}")
            self.message = UPDATE_ERROR_MESSAGE
            return False

        if not response.ok:
            logger.error(f"Product update rejected with status {response.status_code}")
            self.message = UPDATE_FAILED_MESSAGE
            return False

        updated = Product.model_validate(response.json())
        self.products = [updated if p.id == updated.id else p for p in self.products]
        self.message = f'Updated "{edited["name"]}" successfully!'
        self.editing = None
        return True
