"""Purchase recording — command and handler behind the storefront checkout."""

import json

import structlog
from protean import handle
from protean.fields import String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.purchase.purchase import CustomerPurchase
from ordering.utils.references import next_daily_reference

logger = structlog.get_logger(__name__)


@ordering.command(part_of="CustomerPurchase")
class RecordPurchase:
    customer_id = String(max_length=100)
    customer_name = String(max_length=255)
    customer_email = String(max_length=255)
    customer_phone = String(max_length=255)
    items = Text()  # JSON: list of {item_name, quantity, unit_price}
    payment_method = String(max_length=50)
    delivery_address = Text()  # JSON: {street, city, postal_code, country}
    notes = Text()


@ordering.command_handler(part_of=CustomerPurchase)
class RecordPurchaseHandler:
    @handle(RecordPurchase)
    def record_purchase(self, command):
        items_data = json.loads(command.items) if command.items else []
        address = json.loads(command.delivery_address) if command.delivery_address else None

        repo = current_domain.repository_for(CustomerPurchase)
        purchase = CustomerPurchase.record(
            purchase_number=next_daily_reference(repo, "PUR", "purchase_number"),
            customer_id=command.customer_id,
            customer_name=command.customer_name,
            customer_email=command.customer_email,
            customer_phone=command.customer_phone,
            items_data=items_data,
            payment_method=command.payment_method,
            delivery_address=address,
            notes=command.notes,
        )
        repo.add(purchase)

        logger.info(
            "Customer purchase recorded",
            purchase_id=str(purchase.id),
            purchase_number=purchase.purchase_number,
            total_amount=purchase.total_amount,
        )
        return {"purchase_id": str(purchase.id), "purchase_number": purchase.purchase_number}
