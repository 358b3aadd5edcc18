"""
Cart store: the storefront's single source of truth for the shopping cart.

The store is an owned object handed to whichever component needs it. Every
mutation is written through to the durable slot before subscribers are
notified.
"""
import json
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, TypeAdapter

from demoshop.core.config import settings
from demoshop.models.cart import CartItem

logger = logging.getLogger(__name__)

CartListener = Callable[[List[CartItem]], None]

_cart_adapter = TypeAdapter(List[CartItem])


def _product_fields(product: Union[BaseModel, Mapping[str, Any]]) -> Dict[str, Any]:
    """Extract the cart-relevant fields of a product model or mapping."""
    if isinstance(product, BaseModel):
        data = product.model_dump(by_alias=True)
    else:
        data = dict(product)

    if "_id" not in data and "id" in data:
        data["_id"] = data.pop("id")
    for key in ("quantity", "customCoffee", "customization"):
        data.pop(key, None)
    return data


class CartStore:
    """In-memory cart with write-through persistence and change callbacks."""

    def __init__(self, storage, key: str = settings.CART_STORAGE_KEY):
        self.storage = storage
        self.key = key
        self._items: List[CartItem] = []
        self._listeners: List[CartListener] = []
        self.load()

    # ---- persistence ----

    def load(self) -> List[CartItem]:
        """Rehydrate the cart from the durable slot, falling back to empty."""
        raw = self.storage.get(self.key)
        if raw is None:
            self._items = []
            return self.get()

        try:
            self._items = _cart_adapter.validate_json(raw)
        except ValueError as e:
            logger.warning(f"Discarding unreadable cart stored under '{self.key}': {str(e)}")
            self._items = []
        return self.get()

    def _persist(self) -> None:
        payload = json.dumps(
            [item.model_dump(by_alias=True, exclude_none=True) for item in self._items]
        )
        try:
            self.storage.set(self.key, payload)
        except OSError as e:
            logger.error(f"Failed to persist cart under '{self.key}': {str(e)}")

    def _commit(self) -> None:
        self._persist()
        snapshot = self.get()
        for listener in list(self._listeners):
            listener(snapshot)

    # ---- observation ----

    def get(self) -> List[CartItem]:
        """Snapshot of the cart entries, in insertion order."""
        return [item.model_copy(deep=True) for item in self._items]

    @property
    def items(self) -> List[CartItem]:
        return self.get()

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """
        Register a callback invoked with a snapshot after every mutation.

        Returns a function that removes the callback again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def __len__(self) -> int:
        return len(self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    def total(self) -> float:
        """Sum of price * quantity over all entries, unrounded."""
        return sum(item.subtotal for item in self._items)

    def count(self) -> int:
        """Number of units in the cart (badge count)."""
        return sum(item.quantity for item in self._items)

    # ---- mutation ----

    def add_item(
        self,
        product: Union[BaseModel, Mapping[str, Any]],
        quantity: int = 1,
        customization: Optional[Dict[str, Any]] = None
    ) -> List[CartItem]:
        """
        Add a product to the cart.

        Uncustomized products merge into an existing uncustomized entry with
        the same id; customized products always get their own entry.

        Raises:
            ValueError: If quantity is not positive
        """
        if quantity <= 0:
            raise ValueError(f"Quantity must be positive, got {quantity}")

        fields = _product_fields(product)

        if not customization:
            for item in self._items:
                if item.id == fields.get("_id") and not item.is_customized:
                    item.quantity += quantity
                    self._commit()
                    return self.get()

        self._items.append(
            CartItem.model_validate({
                **fields,
                "quantity": quantity,
                "customCoffee": dict(customization) if customization else None
            })
        )
        self._commit()
        return self.get()

    def remove_item(self, index: int) -> List[CartItem]:
        """Remove the entry at index; out-of-range indexes are ignored."""
        if not 0 <= index < len(self._items):
            logger.warning(f"Ignoring removal of cart index {index} (cart has {len(self._items)} entries)")
            return self.get()

        del self._items[index]
        self._commit()
        return self.get()

    def update_quantity(self, index: int, quantity: int) -> List[CartItem]:
        """Set the quantity at index; zero or less removes the entry."""
        if quantity <= 0:
            return self.remove_item(index)

        if not 0 <= index < len(self._items):
            logger.warning(f"Ignoring quantity update of cart index {index} (cart has {len(self._items)} entries)")
            return self.get()

        self._items[index].quantity = quantity
        self._commit()
        return self.get()

    def clear(self) -> List[CartItem]:
        """Empty the cart."""
        self._items = []
        self._commit()
        return self.get()
