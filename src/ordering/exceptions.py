"""Domain-specific failures raised by the ordering domain.

Each one extends the Protean exception that already carries the right HTTP
meaning in ``protean.integrations.fastapi``: not-found maps to 404, invalid
state to 409 and invalid operation to 422.
"""

from protean.exceptions import InvalidOperationError, InvalidStateError, ObjectNotFoundError


class OrderNotFound(ObjectNotFoundError):
    def __init__(self, order_id):
        self.order_id = str(order_id)
        super().__init__(f"Order {self.order_id} not found")


class InventoryItemNotFound(ObjectNotFoundError):
    def __init__(self, inventory_item_id):
        self.inventory_item_id = str(inventory_item_id)
        super().__init__(f"Inventory item {self.inventory_item_id} not found")


class InvalidTransition(InvalidStateError):
    """The order is not in a status that allows the requested change."""

    def __init__(self, order_id, current_status, action):
        self.order_id = str(order_id)
        self.current_status = current_status
        self.action = action
        super().__init__(f"Cannot {action} order {self.order_id} in {current_status} status")


class InsufficientStock(InvalidOperationError):
    """Factory inventory cannot cover every line of an order.

    ``shortages`` lists one dict per short item with ``item_name``,
    ``requested`` and ``available`` keys.
    """

    def __init__(self, shortages):
        self.shortages = list(shortages)
        names = ", ".join(s["item_name"] for s in self.shortages)
        super().__init__(f"Insufficient stock for: {names}")
