"""Order acceptance — command, handler and the serialized entry point.

Accepting an order reserves factory stock for every line or for none:

1. Sum the requested quantity per item name.
2. Check every item against on-hand stock, collecting all shortages.
3. Only when nothing is short, draw down each item and accept the order.

The handler runs inside a Unit of Work, so an exception at any point rolls
back every change made so far. ``accept_order`` additionally serializes
accepts of the same order within the process; across processes the
aggregate version check rejects the losing writer, and its retry re-reads
the order and fails with ``InvalidTransition``.
"""

import threading
from contextlib import contextmanager

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.exceptions import InsufficientStock, OrderNotFound
from ordering.order.order import DEFAULT_ACCEPTED_BY, Order
from ordering.stock.stock import InventoryItem

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class AcceptOrder:
    order_id = Identifier(required=True)
    accepted_by = String(max_length=100, default=DEFAULT_ACCEPTED_BY)


@ordering.command_handler(part_of=Order)
class AcceptOrderHandler:
    @handle(AcceptOrder)
    def accept_order(self, command):
        order_repo = current_domain.repository_for(Order)
        stock_repo = current_domain.repository_for(InventoryItem)

        try:
            order = order_repo.get(command.order_id)
        except ObjectNotFoundError:
            raise OrderNotFound(command.order_id) from None

        # Status is checked before touching stock so a repeated accept never
        # reports shortages for stock it already consumed.
        order.accept(command.accepted_by)

        requested = order.requested_quantities()
        stock = {}
        shortages = []
        for item_name, quantity in requested.items():
            matches = stock_repo._dao.query.filter(name=item_name).all().items
            item = matches[0] if matches else None
            available = item.quantity if item else 0
            if available < quantity:
                shortages.append({"item_name": item_name, "requested": quantity, "available": available})
            else:
                stock[item_name] = item

        if shortages:
            logger.info(
                "Order acceptance rejected for insufficient stock",
                order_id=str(order.id),
                shortages=shortages,
            )
            raise InsufficientStock(shortages)

        adjustments = []
        for item_name, quantity in requested.items():
            item = stock[item_name]
            previous, new = item.reserve(quantity, order_id=order.id)
            stock_repo.add(item)
            adjustments.append(
                {
                    "item_name": item_name,
                    "quantity_reserved": quantity,
                    "previous_quantity": previous,
                    "new_quantity": new,
                }
            )

        order.record_adjustments(adjustments)
        order_repo.add(order)

        logger.info(
            "Order accepted",
            order_id=str(order.id),
            order_number=order.order_number,
            accepted_by=order.accepted_by,
            items_reserved=len(adjustments),
        )
        return adjustments


_locks_guard = threading.Lock()
# order id -> [lock, callers holding or waiting for it]; dropped when unused
_order_locks: dict[str, list] = {}


@contextmanager
def _order_lock(order_id: str):
    with _locks_guard:
        entry = _order_locks.setdefault(order_id, [threading.Lock(), 0])
        entry[1] += 1
    try:
        with entry[0]:
            yield
    finally:
        with _locks_guard:
            entry[1] -= 1
            if entry[1] == 0:
                del _order_locks[order_id]


def accept_order(order_id, accepted_by=None):
    """Accept an order, one caller at a time per order.

    Returns the list of stock adjustments made for the order.
    """
    order_id = str(order_id)
    with _order_lock(order_id):
        return current_domain.process(
            AcceptOrder(order_id=order_id, accepted_by=accepted_by or DEFAULT_ACCEPTED_BY),
            asynchronous=False,
        )
