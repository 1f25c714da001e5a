"""Order creation — command and handler."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order
from ordering.utils.references import next_daily_reference


@ordering.command(part_of="Order")
class CreateOrder:
    """Place a new order with the factory.

    Fields are deliberately loose here; ``Order.create`` validates the whole
    request and reports every problem at once.
    """

    branch_name = String(max_length=255)
    branch_id = Identifier()
    branch_location = String(max_length=255)
    contact_person = String(max_length=255)
    contact_phone = String(max_length=255)
    expected_delivery_date = String(max_length=50)  # ISO date
    items = Text()  # JSON: list of {item_name, quantity, unit}
    priority = String(max_length=50)
    source = String(max_length=50)
    notes = Text()


@ordering.command_handler(part_of=Order)
class CreateOrderHandler:
    @handle(CreateOrder)
    def create_order(self, command):
        try:
            items_data = json.loads(command.items) if isinstance(command.items, str) else command.items
        except json.JSONDecodeError:
            raise ValidationError({"items": ["Items must be valid JSON"]}) from None

        repo = current_domain.repository_for(Order)
        order = Order.create(
            order_number=next_daily_reference(repo, "ORD", "order_number"),
            branch_name=command.branch_name,
            branch_id=command.branch_id,
            branch_location=command.branch_location,
            contact_person=command.contact_person,
            contact_phone=command.contact_phone,
            expected_delivery_date=command.expected_delivery_date,
            items_data=items_data,
            priority=command.priority,
            source=command.source,
            notes=command.notes,
        )
        repo.add(order)
        return {"order_id": str(order.id), "order_number": order.order_number}
