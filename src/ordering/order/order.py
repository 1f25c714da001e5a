"""Order aggregate (CQRS) — restock and purchase orders placed with the factory.

Orders are placed by branches (or directly by factory staff) and move through
a fixed set of statuses. Acceptance is the only guarded transition: it is
allowed from Pending alone and is paired with an all-or-nothing inventory
reservation (see ``ordering.order.acceptance``). Every other move is a manual
operator override and is not checked against a transition table.

    Pending → Accepted → Processing → Shipped → Delivered
    Cancelled reachable from any non-terminal status
"""

import json
import os
import re
from datetime import UTC, date, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Date, DateTime, HasMany, Identifier, Integer, String, Text

from ordering.domain import ordering
from ordering.exceptions import InvalidTransition
from ordering.order.events import (
    InventoryUpdated,
    OrderAccepted,
    OrderCreated,
    OrderDeleted,
    OrderStatusUpdated,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "Pending"
    ACCEPTED = "Accepted"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


class Priority(Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    URGENT = "Urgent"


class OrderSource(Enum):
    DIRECT = "Direct"
    BRANCH_REQUEST = "Branch Request"


# Lower rank sorts first in the pending queue
PRIORITY_RANK = {
    Priority.URGENT.value: 0,
    Priority.HIGH.value: 1,
    Priority.MEDIUM.value: 2,
    Priority.LOW.value: 3,
}

# Statuses that trigger an inventory refresh signal
_INVENTORY_SIGNAL_STATUSES = {OrderStatus.SHIPPED, OrderStatus.DELIVERED}

PHONE_PATTERN = re.compile(r"^\+?[0-9\s\-()]{10,}$")
DEFAULT_UNIT = "pieces"
DEFAULT_ACCEPTED_BY = "Factory Manager"


def max_line_quantity() -> int:
    """Per-line quantity ceiling, overridable through AQUALINK_MAX_LINE_QUANTITY."""
    return int(os.getenv("AQUALINK_MAX_LINE_QUANTITY", "1000"))


# ---------------------------------------------------------------------------
# Request validation
# ---------------------------------------------------------------------------
def _blank(value):
    return value is None or not str(value).strip()


def _parse_date(value):
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])


def _parse_quantity(value):
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def validate_order_request(
    branch_name,
    branch_location,
    contact_person,
    contact_phone,
    expected_delivery_date,
    items_data,
    priority=None,
    source=None,
    today=None,
):
    """Check an order request and return ``(errors, delivery_date, lines)``.

    Every violation is collected so the caller can report them together.
    ``errors`` maps a field name (``items[1].quantity`` for line fields) to a
    list of messages; it is empty when the request is acceptable.
    """
    errors = {}
    today = today or datetime.now(UTC).date()

    if _blank(branch_name):
        errors["branch_name"] = ["Branch name is required"]
    elif len(str(branch_name).strip()) < 2:
        errors["branch_name"] = ["Branch name must be at least 2 characters"]

    if _blank(branch_location):
        errors["branch_location"] = ["Branch location is required"]

    if _blank(contact_person):
        errors["contact_person"] = ["Contact person is required"]

    if _blank(contact_phone):
        errors["contact_phone"] = ["Contact phone is required"]
    elif not PHONE_PATTERN.match(str(contact_phone).strip()):
        errors["contact_phone"] = ["Please enter a valid phone number"]

    delivery_date = None
    if _blank(expected_delivery_date):
        errors["expected_delivery_date"] = ["Expected delivery date is required"]
    else:
        try:
            delivery_date = _parse_date(expected_delivery_date)
        except ValueError:
            errors["expected_delivery_date"] = ["Expected delivery date must be a valid date"]
        else:
            if delivery_date < today:
                errors["expected_delivery_date"] = ["Expected delivery date cannot be in the past"]

    if priority is not None and priority not in {p.value for p in Priority}:
        errors["priority"] = [f"Priority must be one of {', '.join(p.value for p in Priority)}"]

    if source is not None and source not in {s.value for s in OrderSource}:
        errors["source"] = [f"Source must be one of {', '.join(s.value for s in OrderSource)}"]

    lines = []
    ceiling = max_line_quantity()
    if not items_data:
        errors["items"] = ["At least one item is required"]
    elif not isinstance(items_data, list) or not all(isinstance(item, dict) for item in items_data):
        errors["items"] = ["Items must be a list of item entries"]
    else:
        for index, item in enumerate(items_data):
            item_name = item.get("item_name")
            quantity = _parse_quantity(item.get("quantity"))

            if _blank(item_name):
                errors[f"items[{index}].item_name"] = ["Item name is required"]
            if quantity is None or quantity < 1:
                errors[f"items[{index}].quantity"] = ["Quantity must be a positive whole number"]
            elif quantity > ceiling:
                errors[f"items[{index}].quantity"] = [f"Quantity cannot exceed {ceiling}"]

            lines.append(
                {
                    "item_name": str(item_name).strip() if item_name else item_name,
                    "quantity": quantity,
                    "unit": item.get("unit") or DEFAULT_UNIT,
                }
            )

    return errors, delivery_date, lines


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderLine:
    """A requested product and quantity; unit defaults to pieces."""

    item_name = String(required=True, max_length=100)
    quantity = Integer(required=True, min_value=1)
    unit = String(max_length=30, default=DEFAULT_UNIT)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    order_number = String(required=True, max_length=20, unique=True)
    branch_name = String(required=True, max_length=100)
    branch_id = Identifier()
    branch_location = String(required=True, max_length=255)
    contact_person = String(required=True, max_length=100)
    contact_phone = String(required=True, max_length=30)
    items = HasMany(OrderLine)
    total_quantity = Integer(default=0)
    priority = String(choices=Priority, default=Priority.MEDIUM.value)
    source = String(choices=OrderSource, default=OrderSource.DIRECT.value)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    expected_delivery_date = Date(required=True)
    notes = Text()
    order_date = DateTime()
    accepted_date = DateTime()
    accepted_by = String(max_length=100)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        order_number,
        branch_name,
        branch_location,
        contact_person,
        contact_phone,
        expected_delivery_date,
        items_data,
        branch_id=None,
        priority=None,
        source=None,
        notes=None,
        today=None,
    ):
        """Validate an order request and build a Pending order.

        Args:
            order_number: Server-assigned ``ORD-YYYYMMDD-NNN`` reference.
            items_data: List of dicts with item_name, quantity and optional unit.
            today: Reference date for the delivery-date check (defaults to
                   the current UTC date).

        Raises:
            ValidationError: With every failing field, when the request is invalid.
        """
        errors, delivery_date, lines = validate_order_request(
            branch_name=branch_name,
            branch_location=branch_location,
            contact_person=contact_person,
            contact_phone=contact_phone,
            expected_delivery_date=expected_delivery_date,
            items_data=items_data,
            priority=priority,
            source=source,
            today=today,
        )
        if errors:
            raise ValidationError(errors)

        now = datetime.now(UTC)
        order = cls(
            order_number=order_number,
            branch_name=str(branch_name).strip(),
            branch_id=branch_id or None,
            branch_location=str(branch_location).strip(),
            contact_person=str(contact_person).strip(),
            contact_phone=str(contact_phone).strip(),
            items=[OrderLine(**line) for line in lines],
            total_quantity=sum(line["quantity"] for line in lines),
            priority=priority or Priority.MEDIUM.value,
            source=source or OrderSource.DIRECT.value,
            status=OrderStatus.PENDING.value,
            expected_delivery_date=delivery_date,
            notes=notes,
            order_date=now,
            created_at=now,
            updated_at=now,
        )

        order.raise_(
            OrderCreated(
                order_id=str(order.id),
                order_number=order.order_number,
                branch_name=order.branch_name,
                branch_id=str(branch_id) if branch_id else None,
                branch_location=order.branch_location,
                priority=order.priority,
                source=order.source,
                status=order.status,
                items=json.dumps(lines),
                total_quantity=order.total_quantity,
                expected_delivery_date=delivery_date,
                created_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def requested_quantities(self):
        """Total requested quantity per item name, in first-seen order."""
        totals = {}
        for line in self.items:
            totals[line.item_name] = totals.get(line.item_name, 0) + line.quantity
        return totals

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def accept(self, accepted_by=None):
        """Mark a Pending order as accepted."""
        if OrderStatus(self.status) != OrderStatus.PENDING:
            raise InvalidTransition(self.id, self.status, "accept")

        now = datetime.now(UTC)
        self.status = OrderStatus.ACCEPTED.value
        self.accepted_date = now
        self.accepted_by = accepted_by or DEFAULT_ACCEPTED_BY
        self.updated_at = now

        self.raise_(
            OrderAccepted(
                order_id=str(self.id),
                order_number=self.order_number,
                accepted_by=self.accepted_by,
                accepted_date=now,
            )
        )

    def record_adjustments(self, adjustments):
        """Publish the stock movements made while accepting this order."""
        self.raise_(
            InventoryUpdated(
                order_id=str(self.id),
                order_number=self.order_number,
                action="orderAccepted",
                new_status=self.status,
                adjustments=json.dumps(adjustments),
                occurred_at=datetime.now(UTC),
            )
        )

    def update_status(self, new_status):
        """Move the order to any enumerated status (operator override)."""
        try:
            target = OrderStatus(new_status)
        except ValueError:
            raise ValidationError(
                {"status": [f"Status must be one of {', '.join(s.value for s in OrderStatus)}"]}
            ) from None

        previous = self.status
        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        self.raise_(
            OrderStatusUpdated(
                order_id=str(self.id),
                order_number=self.order_number,
                previous_status=previous,
                new_status=target.value,
                updated_at=now,
            )
        )

        if target in _INVENTORY_SIGNAL_STATUSES:
            self.raise_(
                InventoryUpdated(
                    order_id=str(self.id),
                    order_number=self.order_number,
                    action="orderStatusUpdated",
                    new_status=target.value,
                    adjustments=json.dumps([]),
                    occurred_at=now,
                )
            )

    def mark_deleted(self):
        """Record the removal; the handler deletes the stored record."""
        self.raise_(
            OrderDeleted(
                order_id=str(self.id),
                order_number=self.order_number,
                deleted_at=datetime.now(UTC),
            )
        )
