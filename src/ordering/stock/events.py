"""Domain events for the InventoryItem aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="InventoryItem")
class InventoryItemAdded:
    """A new stock record was registered in the factory inventory."""

    __version__ = 1

    inventory_item_id = Identifier(required=True)
    name = String(required=True)
    quantity = Integer(required=True)
    unit = String()
    min_stock_level = Integer()
    max_stock_level = Integer()
    price = Float()
    category = String()
    added_at = DateTime(required=True)


@ordering.event(part_of="InventoryItem")
class StockReserved:
    """On-hand quantity was drawn down to fulfil an accepted order."""

    __version__ = 1

    inventory_item_id = Identifier(required=True)
    name = String(required=True)
    order_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    reserved_at = DateTime(required=True)


@ordering.event(part_of="InventoryItem")
class StockReceived:
    """Produced or delivered stock was added to the on-hand quantity."""

    __version__ = 1

    inventory_item_id = Identifier(required=True)
    name = String(required=True)
    quantity = Integer(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    received_at = DateTime(required=True)


@ordering.event(part_of="InventoryItem")
class LowStockDetected:
    """On-hand quantity fell to or below the item's minimum stock level."""

    __version__ = 1

    inventory_item_id = Identifier(required=True)
    name = String(required=True)
    current_quantity = Integer(required=True)
    min_stock_level = Integer(required=True)
    detected_at = DateTime(required=True)
