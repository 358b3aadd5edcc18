"""
Catalog query layer for the storefront.

Products and categories are fetched once per activation. A failed fetch is
logged and leaves the previous list in place.
"""
import asyncio
import logging
from typing import List

import requests

from demoshop.models.product import Product

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "All"


class CatalogQuery:
    """Fetched product and category lists plus client-side filtering."""

    def __init__(self, client):
        self.client = client
        self.products: List[Product] = []
        self.categories: List[str] = [ALL_CATEGORIES]
        self.selected_category = ALL_CATEGORIES

    async def fetch_products(self) -> List[Product]:
        try:
            self.products = await asyncio.to_thread(self.client.get_products)
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Error fetching products: {str(e)}")
        return self.products

    async def fetch_categories(self) -> List[str]:
        try:
            fetched = await asyncio.to_thread(self.client.get_categories)
            self.categories = [ALL_CATEGORIES, *fetched]
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Error fetching categories: {str(e)}")
        return self.categories

    async def activate(self) -> None:
        """Fire both fetches; neither blocks on the other."""
        await asyncio.gather(self.fetch_products(), self.fetch_categories())

    def filter_by(self, category: str) -> List[Product]:
        if category == ALL_CATEGORIES:
            return list(self.products)
        return [product for product in self.products if product.category == category]

    def select_category(self, category: str) -> List[Product]:
        self.selected_category = category
        return self.visible_products

    @property
    def visible_products(self) -> List[Product]:
        return self.filter_by(self.selected_category)
