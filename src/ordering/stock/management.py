"""Inventory management — commands and handler.

Operators register stock items and restock them as production completes.
On-hand quantities are never decremented here; only order acceptance does that.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.exceptions import InventoryItemNotFound
from ordering.stock.stock import InventoryItem


@ordering.command(part_of="InventoryItem")
class AddInventoryItem:
    """Register a new product in the factory inventory."""

    name = String(required=True, max_length=100)
    quantity = Integer(default=0)
    unit = String(max_length=30, default="pieces")
    min_stock_level = Integer(default=10)
    max_stock_level = Integer(default=100)
    price = Float(default=0.0)
    category = String(max_length=50)


@ordering.command(part_of="InventoryItem")
class RestockItem:
    """Add produced or delivered units to an inventory item."""

    inventory_item_id = Identifier(required=True)
    quantity = Integer(required=True)


@ordering.command_handler(part_of=InventoryItem)
class ManageInventoryHandler:
    @handle(AddInventoryItem)
    def add_inventory_item(self, command):
        item = InventoryItem.create(
            name=command.name,
            quantity=command.quantity,
            unit=command.unit,
            min_stock_level=command.min_stock_level,
            max_stock_level=command.max_stock_level,
            price=command.price,
            category=command.category,
        )
        current_domain.repository_for(InventoryItem).add(item)
        return str(item.id)

    @handle(RestockItem)
    def restock_item(self, command):
        repo = current_domain.repository_for(InventoryItem)
        try:
            item = repo.get(command.inventory_item_id)
        except ObjectNotFoundError:
            raise InventoryItemNotFound(command.inventory_item_id) from None

        item.receive(command.quantity)
        repo.add(item)
        return item.quantity
