"""
Checkout workflow: review -> confirm -> submit, reconciled with the API.

Failures are converted into user-facing messages and never propagate. The
cart is only ever cleared after a successful submission, once the success
message has been on screen for ``success_delay`` seconds.
"""
import asyncio
import logging
from enum import Enum
from typing import List, Optional

import requests
from pydantic import BaseModel, ValidationError

from demoshop.core.config import settings
from demoshop.models.cart import CartItem
from demoshop.schemas.order import CartOrder, CartOrderItem
from demoshop.services.cart_store import CartStore
from demoshop.utils.helpers import format_price

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Order placed successfully!"
REJECTED_MESSAGE = "Failed to place order. Please try again."
NETWORK_ERROR_MESSAGE = "Error placing order. Please check your connection and try again."


class CheckoutState(str, Enum):
    """Checkout workflow states."""
    REVIEWING = "reviewing"
    CONFIRMING = "confirming"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"  # Success shown, cart cleared after the delay


class CheckoutOutcome(str, Enum):
    """Result classes of an order submission."""
    SUCCESS = "success"
    REJECTED = "rejected"
    NETWORK_ERROR = "network_error"


class CheckoutResult(BaseModel):
    """Outcome of a single confirm."""
    outcome: CheckoutOutcome
    message: str
    status_code: Optional[int] = None


class OrderSummary(BaseModel):
    """Frozen view of the cart shown while confirming."""
    items: List[CartItem]
    subtotals: List[float]
    item_count: int
    total: float
    formatted_total: str


def build_order(items: List[CartItem], total: float) -> CartOrder:
    """Serialize cart entries into an order payload; customizations pass through as-is."""
    return CartOrder(
        items=[
            CartOrderItem(
                product_id=item.id,
                name=item.name,
                price=item.price,
                quantity=item.quantity,
                customization=item.customization or None
            )
            for item in items
        ],
        total_amount=total
    )


class CheckoutWorkflow:
    """Drives a cart through checkout against the orders endpoint."""

    def __init__(
        self,
        cart: CartStore,
        client,
        success_delay: float = settings.CHECKOUT_SUCCESS_DELAY
    ):
        self.cart = cart
        self.client = client
        self.success_delay = success_delay
        self.state = CheckoutState.REVIEWING
        self.message: Optional[str] = None
        self._in_flight = False
        self._clear_handle: Optional[asyncio.TimerHandle] = None

    @property
    def is_empty(self) -> bool:
        return self.cart.is_empty

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def request_checkout(self) -> bool:
        """Move from reviewing to confirming; not possible with an empty cart."""
        if self.state != CheckoutState.REVIEWING or self.cart.is_empty:
            return False
        self.state = CheckoutState.CONFIRMING
        return True

    def cancel(self) -> bool:
        """Back out of the confirmation step."""
        if self.state != CheckoutState.CONFIRMING:
            return False
        self.state = CheckoutState.REVIEWING
        return True

    def order_summary(self) -> OrderSummary:
        items = self.cart.get()
        total = self.cart.total()
        return OrderSummary(
            items=items,
            subtotals=[item.subtotal for item in items],
            item_count=self.cart.count(),
            total=total,
            formatted_total=format_price(total)
        )

    def dismiss_message(self) -> None:
        self.message = None

    async def confirm(self) -> Optional[CheckoutResult]:
        """
        Submit the order once.

        Returns None when the confirm is ignored (wrong state, or a
        submission is already in flight).
        """
        if self._in_flight:
            logger.warning("Ignoring confirm: an order submission is already in flight")
            return None
        if self.state != CheckoutState.CONFIRMING:
            logger.warning(f"Ignoring confirm in state '{self.state.value}'")
            return None
        if self.cart.is_empty:
            self.state = CheckoutState.REVIEWING
            return None

        self._in_flight = True
        self.state = CheckoutState.SUBMITTING
        try:
            try:
                order = build_order(self.cart.get(), self.cart.total())
            except ValidationError as e:
                logger.error(f"Cart could not be serialized into an order: {str(e)}")
                return self._fail(CheckoutOutcome.REJECTED, REJECTED_MESSAGE)

            try:
                response = await asyncio.to_thread(self.client.create_order, order)
            except requests.RequestException as e:
                logger.error(f"Error placing order: {str(e)}")
                return self._fail(CheckoutOutcome.NETWORK_ERROR, NETWORK_ERROR_MESSAGE)

            if not response.ok:
                logger.error(f"Order rejected by server with status {response.status_code}")
                return self._fail(CheckoutOutcome.REJECTED, REJECTED_MESSAGE, response.status_code)

            return self._succeed(response.status_code)
        finally:
            self._in_flight = False
            if self.state == CheckoutState.SUBMITTING:
                self.state = CheckoutState.CONFIRMING

    def _fail(
        self,
        outcome: CheckoutOutcome,
        message: str,
        status_code: Optional[int] = None
    ) -> CheckoutResult:
        self.state = CheckoutState.CONFIRMING
        self.message = message
        return CheckoutResult(outcome=outcome, message=message, status_code=status_code)

    def _succeed(self, status_code: int) -> CheckoutResult:
        self.state = CheckoutState.SUCCEEDED
        self.message = SUCCESS_MESSAGE
        logger.info(f"Order placed ({self.cart.count()} units, total {format_price(self.cart.total())})")

        loop = asyncio.get_running_loop()
        self._clear_handle = loop.call_later(self.success_delay, self._finish_success)
        return CheckoutResult(outcome=CheckoutOutcome.SUCCESS, message=SUCCESS_MESSAGE, status_code=status_code)

    def _finish_success(self) -> None:
        self._clear_handle = None
        self.cart.clear()
        self.state = CheckoutState.REVIEWING

    def close(self) -> None:
        """Cancel any pending post-success clear (view torn down)."""
        if self._clear_handle is not None:
            self._clear_handle.cancel()
            self._clear_handle = None
