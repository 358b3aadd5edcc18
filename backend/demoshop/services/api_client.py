"""
HTTP client for the Demo Shop API.

Read calls raise ``requests`` exceptions on transport failures and non-2xx
statuses. Write calls return the raw response so callers decide how to
classify the status.
"""
import logging
from typing import List, Optional

import requests

from demoshop.core.config import settings
from demoshop.models.product import Product
from demoshop.schemas.order import CartOrder

logger = logging.getLogger(__name__)


class ShopApiClient:
    """Thin wrapper around a ``requests.Session`` bound to the API base URL."""

    def __init__(
        self,
        base_url: str = settings.API_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = settings.REQUEST_TIMEOUT,
        prefix: str = settings.API_PREFIX
    ):
        self.base_url = base_url.rstrip("/")
        self.prefix = prefix
        self.session = session or requests.Session()
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}{self.prefix}{path}"

    def get_products(self, category: Optional[str] = None) -> List[Product]:
        params = {"category": category} if category else None
        response = self.session.get(self._url("/products"), params=params, timeout=self.timeout)
        response.raise_for_status()
        return [Product.model_validate(product) for product in response.json()]

    def get_categories(self) -> List[str]:
        response = self.session.get(self._url("/products/categories/all"), timeout=self.timeout)
        response.raise_for_status()
        return [str(category) for category in response.json()]

    def get_product(self, product_id: str) -> Product:
        response = self.session.get(self._url(f"/products/{product_id}"), timeout=self.timeout)
        response.raise_for_status()
        return Product.model_validate(response.json())

    def update_product(self, product_id: str, price: float, in_stock: bool) -> requests.Response:
        """PUT the admin-editable fields of a product."""
        logger.info(f"Updating product {product_id}: price={price}, inStock={in_stock}")
        return self.session.put(
            self._url(f"/products/{product_id}"),
            json={"price": price, "inStock": in_stock},
            timeout=self.timeout
        )

    def create_order(self, order: CartOrder) -> requests.Response:
        """POST an order; exactly one request per call."""
        return self.session.post(
            self._url("/orders"),
            json=order.model_dump(mode="json", by_alias=True, exclude_none=True),
            timeout=self.timeout
        )

    def get_orders(self) -> list:
        response = self.session.get(self._url("/orders"), timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def close(self) -> None:
        self.session.close()
