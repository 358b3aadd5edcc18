"""
Storefront wiring: one owned cart shared by the catalog, builder and checkout.
"""
import logging
from typing import Optional

from demoshop.core.config import Settings, settings as default_settings
from demoshop.models.product import Product
from demoshop.services.api_client import ShopApiClient
from demoshop.services.cart_store import CartStore
from demoshop.services.catalog import CatalogQuery
from demoshop.services.checkout import CheckoutWorkflow
from demoshop.services.coffee_builder import CoffeeBuilder
from demoshop.services.product_admin import ProductAdmin
from demoshop.services.storage import JsonFileStorage

logger = logging.getLogger(__name__)


class Storefront:
    """Holds the storefront collaborators and passes the cart to each of them."""

    def __init__(self, cart: CartStore, client: ShopApiClient, success_delay: float):
        self.cart = cart
        self.client = client
        self.catalog = CatalogQuery(client)
        self.checkout = CheckoutWorkflow(cart, client, success_delay=success_delay)
        self.admin = ProductAdmin(client)

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "Storefront":
        config = config or default_settings
        cart = CartStore(JsonFileStorage(config.CART_STORAGE_PATH), key=config.CART_STORAGE_KEY)
        client = ShopApiClient(
            base_url=config.API_BASE_URL,
            timeout=config.REQUEST_TIMEOUT,
            prefix=config.API_PREFIX
        )
        return cls(cart, client, success_delay=config.CHECKOUT_SUCCESS_DELAY)

    def add_to_cart(self, product: Product) -> str:
        """Add one unit of a catalog product; returns the confirmation text."""
        self.cart.add_item(product)
        return f'Added "{product.name}" to cart!'

    def build_coffee(self) -> CoffeeBuilder:
        return CoffeeBuilder()

    def close(self) -> None:
        self.checkout.close()
        self.client.close()
