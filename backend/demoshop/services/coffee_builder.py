"""
Custom coffee builder.

Each option is an independent, clamped selection with its own price
contribution. The builder turns the current selections into a product and a
customization record and hands both to the cart in a single call.
"""
import logging
import secrets
import time
from typing import Any, Dict, Optional, Tuple

from demoshop.models.product import ProductCategory

logger = logging.getLogger(__name__)

CUSTOM_COFFEE_IMAGE = (
    "data:image/svg+xml;base64,PHN2ZyB4bWxucz0iaHR0cDovL3d3dy53My5vcmcvMjAwMC9zdmciIHdpZHRoPSIzMDAiIGhlaWdodD0iMjAwIj48cmVjdCB3aWR0aD0iMzAwIiBoZWlnaHQ9IjIwMCIgZmlsbD0iIzhCNDUxMyIvPjx0ZXh0IHg9IjUwJSIgeT0iNTAlIiBmb250LWZhbWlseT0iQXJpYWwiIGZvbnQtc2l6ZT0iMzAiIGZpbGw9IndoaXRlIiB0ZXh0LWFuY2hvcj0ibWlkZGxlIiBkb21pbmFudC1iYXNlbGluZT0ibWlkZGxlIj7imJUgQ3VzdG9tPC90ZXh0Pjwvc3ZnPg=="
)


class RangeOption:
    """Integer option clamped to [minimum, maximum], priced per unit."""

    def __init__(
        self,
        name: str,
        minimum: int,
        maximum: int,
        unit_price: float,
        default: Optional[int] = None,
        free_units: int = 0
    ):
        self.name = name
        self.minimum = minimum
        self.maximum = maximum
        self.unit_price = unit_price
        self.free_units = free_units
        self.value = minimum
        self.set(minimum if default is None else default)

    def set(self, value: int) -> int:
        self.value = max(self.minimum, min(self.maximum, int(value)))
        return self.value

    def increment(self) -> int:
        return self.set(self.value + 1)

    def decrement(self) -> int:
        return self.set(self.value - 1)

    @property
    def price_delta(self) -> float:
        return max(self.value - self.free_units, 0) * self.unit_price


class ChoiceOption:
    """Enumerated option priced by table lookup."""

    def __init__(self, name: str, prices: Dict[str, float], default: str):
        self.name = name
        self.prices = dict(prices)
        self.value = default
        self.set(default)

    def set(self, value: str) -> str:
        if value not in self.prices:
            raise ValueError(
                f"Invalid {self.name} '{value}'. Allowed: {', '.join(self.prices)}"
            )
        self.value = value
        return self.value

    @property
    def price_delta(self) -> float:
        return self.prices[self.value]


class CoffeeBuilder:
    """Builds a custom coffee and adds it to the cart."""

    BASE_PRICE = 3.50
    NAME = "Custom Coffee"
    DESCRIPTION = "Your custom coffee creation"

    def __init__(self, base_price: float = BASE_PRICE):
        self.base_price = base_price
        self.sugar = RangeOption("sugar", 0, 5, unit_price=0.25)
        self.milk = ChoiceOption("milk", {"none": 0.0, "regular": 0.50, "oat": 0.75}, default="none")
        # The first shot is included in the base price
        self.coffee = RangeOption("coffee", 1, 4, unit_price=0.75, free_units=1)
        self.chocolate = RangeOption("chocolate", 0, 5, unit_price=0.50)

    @property
    def options(self) -> Tuple[Any, ...]:
        return (self.sugar, self.milk, self.coffee, self.chocolate)

    def selections(self) -> Dict[str, Any]:
        """Raw option values, keyed by option name."""
        return {option.name: option.value for option in self.options}

    def compute_price(self) -> float:
        return self.base_price + sum(option.price_delta for option in self.options)

    def reset(self) -> None:
        self.sugar.set(0)
        self.milk.set("none")
        self.coffee.set(1)
        self.chocolate.set(0)

    @staticmethod
    def _synthetic_id() -> str:
        return f"custom-coffee-{int(time.time() * 1000)}-{secrets.token_hex(4)}"

    def finalize(self) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        """
        Freeze the current selections.

        Returns:
            (product, customization); the product id is new on every call
        """
        product = {
            "_id": self._synthetic_id(),
            "name": self.NAME,
            "price": self.compute_price(),
            "category": ProductCategory.COFFEE.value,
            "description": self.DESCRIPTION,
            "image": CUSTOM_COFFEE_IMAGE
        }
        return product, self.selections()

    def add_to_cart(self, cart) -> Dict[str, Any]:
        """Finalize and add one custom coffee to the cart."""
        product, customization = self.finalize()
        cart.add_item(product, 1, customization)
        logger.info(f"Added {product['_id']} to cart at {product['price']:.2f}")
        return product
