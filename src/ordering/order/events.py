"""Domain events for the Order aggregate."""

from protean.fields import Date, DateTime, Identifier, Integer, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderCreated:
    """A branch or direct order was placed and is awaiting acceptance."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    branch_name = String(required=True)
    branch_id = Identifier()
    branch_location = String()
    priority = String(required=True)
    source = String(required=True)
    status = String(required=True)
    items = Text(required=True)  # JSON: list of {item_name, quantity, unit}
    total_quantity = Integer(required=True)
    expected_delivery_date = Date()
    created_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderAccepted:
    """The factory accepted the order and reserved stock for every line."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    accepted_by = String(required=True)
    accepted_date = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusUpdated:
    """An operator moved the order to a new status."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    updated_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderDeleted:
    """The order was permanently removed."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    deleted_at = DateTime(required=True)


@ordering.event(part_of="Order")
class InventoryUpdated:
    """Inventory-facing views should refresh.

    ``action`` is ``orderAccepted`` when acceptance drew down stock (with the
    per-item adjustments) and ``orderStatusUpdated`` when an order moved to
    Shipped or Delivered.
    """

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    action = String(required=True)
    new_status = String()
    adjustments = Text()  # JSON: list of {item_name, quantity_reserved, previous_quantity, new_quantity}
    occurred_at = DateTime(required=True)
