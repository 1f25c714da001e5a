"""Inventory activity — the refresh signals raised by order acceptance and shipping.

Inventory dashboards poll this view to know when stock figures changed
because of an order rather than a manual restock.
"""

import json
from uuid import uuid4

from protean.core.projector import on
from protean.fields import DateTime, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.events import InventoryUpdated
from ordering.order.order import Order


@ordering.projection
class InventoryActivity:
    activity_id = Identifier(identifier=True, required=True)
    order_id = Identifier(required=True)
    order_number = String(required=True)
    action = String(required=True)
    new_status = String()
    adjustments = Text()  # JSON
    total_reserved = Integer(default=0)
    occurred_at = DateTime(required=True)


@ordering.projector(projector_for=InventoryActivity, aggregates=[Order])
class InventoryActivityProjector:
    @on(InventoryUpdated)
    def on_inventory_updated(self, event):
        adjustments = json.loads(event.adjustments) if event.adjustments else []
        current_domain.repository_for(InventoryActivity).add(
            InventoryActivity(
                activity_id=str(uuid4()),
                order_id=event.order_id,
                order_number=event.order_number,
                action=event.action,
                new_status=event.new_status,
                adjustments=event.adjustments,
                total_reserved=sum(a["quantity_reserved"] for a in adjustments),
                occurred_at=event.occurred_at,
            )
        )
