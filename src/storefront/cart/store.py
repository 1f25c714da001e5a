"""Cart store: the reducer wired to local persistence and checkout.

Every change is applied through ``reduce`` and the full resulting cart is
written back under the ``cart`` key. On startup the stored document is
replayed through the same reducer, so anything the reducer would reject is
dropped with a warning instead of surfacing as a broken cart.
"""

import json
import time
from dataclasses import dataclass

import structlog
from protean.exceptions import ValidationError

from storefront.cart.state import (
    AddItem,
    CartItem,
    CartState,
    ClearCart,
    Product,
    RemoveItem,
    SetQuantity,
    reduce,
)
from storefront.cart.storage import CART_KEY, CartStorage
from storefront.exceptions import CheckoutRejected, EmptyCartError
from storefront.gateway.port import PurchaseGateway, PurchaseResult

logger = structlog.get_logger(__name__)

# Placeholder customer details used when checkout is given none
DEFAULT_CUSTOMER = {
    "customer_name": "Customer",
    "customer_email": "customer@example.com",
    "customer_phone": "+94 77 123 4567",
    "payment_method": "Cash",
}
DEFAULT_ADDRESS = {
    "street": "Customer Address",
    "city": "Colombo",
    "postal_code": "00100",
    "country": "Sri Lanka",
}


@dataclass(frozen=True)
class CartTotals:
    item_count: int
    total_price: float


def build_purchase_request(state: CartState, customer_info: dict | None = None) -> dict:
    """Translate the cart into the body of a ``POST /purchases`` request."""
    info = dict(customer_info or {})
    address = {**DEFAULT_ADDRESS, **(info.pop("delivery_address", None) or {})}

    payload = {
        "customer_id": info.pop("customer_id", None) or f"customer-{int(time.time() * 1000)}",
        **DEFAULT_CUSTOMER,
        **{key: value for key, value in info.items() if value is not None},
        "delivery_address": address,
        "items": [
            {
                "item_name": item.name,
                "quantity": item.quantity,
                "unit_price": item.price,
            }
            for item in state.items
        ],
    }
    payload.setdefault("notes", f"Cart checkout - {len(state.items)} items")
    return payload


class CartStore:
    """Client-side cart backed by a ``CartStorage`` slot."""

    def __init__(self, storage: CartStorage, gateway: PurchaseGateway | None = None) -> None:
        self.storage = storage
        self.gateway = gateway
        self._state = self._load()

    @property
    def state(self) -> CartState:
        return self._state

    # -------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------
    def _load(self) -> CartState:
        try:
            raw = self.storage.read(CART_KEY)
        except (OSError, ValueError) as exc:
            logger.warning("Cart storage unreadable, starting empty", error=str(exc))
            return CartState()

        if raw is None:
            return CartState()

        try:
            document = json.loads(raw)
            stored = [CartItem.from_dict(entry) for entry in document["items"]]
        except (ValueError, TypeError, KeyError) as exc:
            logger.warning("Stored cart is corrupt, starting empty", error=str(exc))
            return CartState()

        state = CartState()
        for item in stored:
            product = Product(
                id=item.product_id,
                name=item.name,
                price=item.price,
                category=item.category,
                image=item.image,
            )
            try:
                state = reduce(state, AddItem(product=product, quantity=item.quantity))
            except ValidationError as exc:
                logger.warning("Dropped invalid stored cart line", product_id=item.product_id, error=str(exc))
        return state

    def _apply(self, command) -> CartState:
        new_state = reduce(self._state, command)
        # A failed write leaves the in-memory cart as it was
        self.storage.write(CART_KEY, json.dumps(new_state.to_dict()))
        self._state = new_state
        return new_state

    # -------------------------------------------------------------------
    # Cart operations
    # -------------------------------------------------------------------
    def add(self, product: Product, quantity: int = 1) -> CartState:
        return self._apply(AddItem(product=product, quantity=quantity))

    def remove(self, product_id) -> CartState:
        return self._apply(RemoveItem(product_id=str(product_id)))

    def set_quantity(self, product_id, quantity: int) -> CartState:
        return self._apply(SetQuantity(product_id=str(product_id), quantity=quantity))

    def clear(self) -> CartState:
        return self._apply(ClearCart())

    def totals(self) -> CartTotals:
        return CartTotals(item_count=self._state.item_count, total_price=self._state.total_price)

    # -------------------------------------------------------------------
    # Checkout
    # -------------------------------------------------------------------
    def checkout(self, customer_info: dict | None = None) -> PurchaseResult:
        """Submit the cart as a purchase and clear it once the service accepts.

        Raises:
            EmptyCartError: When the cart has no items. The gateway is not called.
            CheckoutRejected: When the service refuses the purchase.
            OrderServiceUnavailable: When the service cannot be reached.
        """
        if self._state.is_empty:
            raise EmptyCartError()
        if self.gateway is None:
            raise RuntimeError("CartStore has no purchase gateway configured")

        payload = build_purchase_request(self._state, customer_info)
        result = self.gateway.submit_purchase(payload)

        if not result.success:
            logger.info("Checkout rejected", message=result.message)
            raise CheckoutRejected(result.errors or {"purchase": [result.message or "Purchase was rejected"]})

        logger.info(
            "Checkout completed",
            purchase_id=result.purchase_id,
            purchase_number=result.purchase_number,
            item_count=self._state.item_count,
        )
        self.clear()
        return result
