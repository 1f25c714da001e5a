"""Low-stock alerting — reacts to LowStockDetected on inventory items."""

import structlog
from protean.utils.mixins import handle

from ordering.domain import ordering
from ordering.stock.events import LowStockDetected
from ordering.stock.stock import InventoryItem

logger = structlog.get_logger(__name__)


@ordering.event_handler(part_of=InventoryItem)
class LowStockAlertHandler:
    @handle(LowStockDetected)
    def on_low_stock(self, event: LowStockDetected) -> None:
        logger.warning(
            "Inventory item at or below minimum stock level",
            inventory_item_id=str(event.inventory_item_id),
            name=event.name,
            current_quantity=event.current_quantity,
            min_stock_level=event.min_stock_level,
        )
