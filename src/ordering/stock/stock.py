"""InventoryItem aggregate — the factory's on-hand stock of one product.

Quantities only go down through order acceptance (``reserve``) and only go up
through restocking (``receive``). The stock status shown to operators is
derived from the on-hand quantity and the item's minimum stock level:

    quantity == 0                  → Out of Stock
    quantity <= min_stock_level    → Low Stock
    otherwise                      → In Stock
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Integer, String

from ordering.domain import ordering
from ordering.stock.events import InventoryItemAdded, LowStockDetected, StockReceived, StockReserved


class StockStatus(Enum):
    IN_STOCK = "In Stock"
    LOW_STOCK = "Low Stock"
    OUT_OF_STOCK = "Out of Stock"


@ordering.aggregate
class InventoryItem:
    name = String(required=True, max_length=100, unique=True)
    quantity = Integer(required=True, min_value=0, default=0)
    unit = String(max_length=30, default="pieces")
    min_stock_level = Integer(min_value=0, default=10)
    max_stock_level = Integer(min_value=0, default=100)
    price = Float(min_value=0.0, default=0.0)
    category = String(max_length=50)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        name,
        quantity=0,
        unit="pieces",
        min_stock_level=10,
        max_stock_level=100,
        price=0.0,
        category=None,
    ):
        if not name or not str(name).strip():
            raise ValidationError({"name": ["Item name is required"]})
        if quantity is None or quantity < 0:
            raise ValidationError({"quantity": ["Quantity cannot be negative"]})

        now = datetime.now(UTC)
        item = cls(
            name=str(name).strip(),
            quantity=quantity,
            unit=unit or "pieces",
            min_stock_level=min_stock_level,
            max_stock_level=max_stock_level,
            price=price,
            category=category,
            created_at=now,
            updated_at=now,
        )
        item.raise_(
            InventoryItemAdded(
                inventory_item_id=str(item.id),
                name=item.name,
                quantity=item.quantity,
                unit=item.unit,
                min_stock_level=item.min_stock_level,
                max_stock_level=item.max_stock_level,
                price=item.price,
                category=item.category,
                added_at=now,
            )
        )
        return item

    @property
    def stock_status(self) -> StockStatus:
        if self.quantity == 0:
            return StockStatus.OUT_OF_STOCK
        if self.quantity <= self.min_stock_level:
            return StockStatus.LOW_STOCK
        return StockStatus.IN_STOCK

    def _check_low_stock(self):
        """Raise LowStockDetected if on-hand is at or below the minimum level."""
        if self.quantity <= self.min_stock_level:
            self.raise_(
                LowStockDetected(
                    inventory_item_id=str(self.id),
                    name=self.name,
                    current_quantity=self.quantity,
                    min_stock_level=self.min_stock_level,
                    detected_at=datetime.now(UTC),
                )
            )

    # -------------------------------------------------------------------
    # Stock movements
    # -------------------------------------------------------------------
    def reserve(self, quantity, order_id):
        """Draw down on-hand stock for an accepted order."""
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})
        if quantity > self.quantity:
            raise ValidationError(
                {"quantity": [f"Insufficient stock: {self.quantity} available, {quantity} requested"]}
            )

        previous = self.quantity
        now = datetime.now(UTC)
        self.quantity = previous - quantity
        self.updated_at = now

        self.raise_(
            StockReserved(
                inventory_item_id=str(self.id),
                name=self.name,
                order_id=str(order_id),
                quantity=quantity,
                previous_quantity=previous,
                new_quantity=self.quantity,
                reserved_at=now,
            )
        )
        self._check_low_stock()

        return previous, self.quantity

    def receive(self, quantity):
        """Add produced or delivered stock to the on-hand quantity."""
        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})

        previous = self.quantity
        now = datetime.now(UTC)
        self.quantity = previous + quantity
        self.updated_at = now

        self.raise_(
            StockReceived(
                inventory_item_id=str(self.id),
                name=self.name,
                quantity=quantity,
                previous_quantity=previous,
                new_quantity=self.quantity,
                received_at=now,
            )
        )
