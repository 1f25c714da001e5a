"""Cart ledger state and the pure reducer that evolves it.

``reduce(state, command)`` never mutates its input and never performs I/O;
persistence and checkout live in ``storefront.cart.store``.
"""

from dataclasses import dataclass, field, replace

from protean.exceptions import ValidationError


@dataclass(frozen=True)
class Product:
    """A catalogue product as the storefront shows it."""

    id: str
    name: str
    price: float
    category: str | None = None
    image: str | None = None


@dataclass(frozen=True)
class CartItem:
    product_id: str
    name: str
    price: float
    quantity: int
    category: str | None = None
    image: str | None = None

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity

    def to_dict(self) -> dict:
        return {
            "id": self.product_id,
            "name": self.name,
            "price": self.price,
            "image": self.image,
            "category": self.category,
            "quantity": self.quantity,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartItem":
        return cls(
            product_id=str(data["id"]),
            name=data["name"],
            price=float(data["price"]),
            quantity=int(data["quantity"]),
            category=data.get("category"),
            image=data.get("image"),
        )


@dataclass(frozen=True)
class CartState:
    """Items in the order they were first added. Totals are computed on read."""

    items: tuple[CartItem, ...] = field(default_factory=tuple)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def total_price(self) -> float:
        return sum(item.subtotal for item in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def find(self, product_id) -> CartItem | None:
        return next((item for item in self.items if item.product_id == str(product_id)), None)

    def to_dict(self) -> dict:
        return {"items": [item.to_dict() for item in self.items]}


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AddItem:
    product: Product
    quantity: int = 1


@dataclass(frozen=True)
class RemoveItem:
    product_id: str


@dataclass(frozen=True)
class SetQuantity:
    product_id: str
    quantity: int


@dataclass(frozen=True)
class ClearCart:
    pass


# ---------------------------------------------------------------------------
# Reducer
# ---------------------------------------------------------------------------
def _check_quantity(quantity) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValidationError({"quantity": ["Quantity must be a positive whole number"]})


def _add(state: CartState, command: AddItem) -> CartState:
    quantity = command.quantity
    _check_quantity(quantity)
    if command.product.price < 0:
        raise ValidationError({"price": ["Price cannot be negative"]})

    product_id = str(command.product.id)
    if state.find(product_id) is not None:
        return CartState(
            items=tuple(
                replace(item, quantity=item.quantity + quantity) if item.product_id == product_id else item
                for item in state.items
            )
        )

    new_item = CartItem(
        product_id=product_id,
        name=command.product.name,
        price=command.product.price,
        quantity=quantity,
        category=command.product.category,
        image=command.product.image,
    )
    return CartState(items=state.items + (new_item,))


def _remove(state: CartState, product_id) -> CartState:
    return CartState(items=tuple(item for item in state.items if item.product_id != str(product_id)))


def _set_quantity(state: CartState, command: SetQuantity) -> CartState:
    quantity = command.quantity
    if isinstance(quantity, (int, float)) and not isinstance(quantity, bool) and quantity <= 0:
        return _remove(state, command.product_id)
    _check_quantity(quantity)
    return CartState(
        items=tuple(
            replace(item, quantity=command.quantity) if item.product_id == str(command.product_id) else item
            for item in state.items
        )
    )


def reduce(state: CartState, command) -> CartState:
    """Return the cart that results from applying ``command`` to ``state``."""
    if isinstance(command, AddItem):
        return _add(state, command)
    if isinstance(command, RemoveItem):
        return _remove(state, command.product_id)
    if isinstance(command, SetQuantity):
        return _set_quantity(state, command)
    if isinstance(command, ClearCart):
        return CartState()
    raise TypeError(f"Unknown cart command: {type(command).__name__}")
