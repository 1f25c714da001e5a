"""Application tests for order creation via domain.process()."""

import json
from datetime import UTC, datetime

import pytest
from ordering.order.creation import CreateOrder
from ordering.order.order import Order, OrderStatus
from protean import current_domain
from protean.exceptions import ValidationError


class TestCreateOrderFlow:
    def test_returns_id_and_number(self, place_order):
        order_id = place_order()
        order = current_domain.repository_for(Order).get(order_id)
        assert order.order_number.startswith("ORD-")

    def test_order_is_persisted_pending(self, place_order):
        order_id = place_order()
        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == OrderStatus.PENDING.value
        assert order.branch_name == "Kandy Branch"

    def test_lines_are_persisted(self, place_order):
        order_id = place_order(
            items=[
                {"item_name": "Filter X", "quantity": 2},
                {"item_name": "Tap", "quantity": 5, "unit": "sets"},
            ]
        )
        order = current_domain.repository_for(Order).get(order_id)

        assert {(line.item_name, line.quantity, line.unit) for line in order.items} == {
            ("Filter X", 2, "pieces"),
            ("Tap", 5, "sets"),
        }
        assert order.total_quantity == 7

    def test_order_number_uses_todays_date(self, place_order):
        order_id = place_order()
        order = current_domain.repository_for(Order).get(order_id)
        assert order.order_number == f"ORD-{datetime.now(UTC):%Y%m%d}-001"

    def test_order_numbers_are_sequential(self, place_order):
        first = current_domain.repository_for(Order).get(place_order())
        second = current_domain.repository_for(Order).get(place_order())

        assert first.order_number.endswith("-001")
        assert second.order_number.endswith("-002")


class TestCreateOrderRejections:
    def test_validation_errors_are_collected(self, place_order):
        with pytest.raises(ValidationError) as exc:
            place_order(items=[{"item_name": "", "quantity": 0}], contact_phone="12")

        assert {"contact_phone", "items[0].item_name", "items[0].quantity"} <= set(exc.value.messages)

    def test_rejected_order_is_not_stored(self, place_order):
        with pytest.raises(ValidationError):
            place_order(branch_name="")

        assert current_domain.repository_for(Order)._dao.query.all().total == 0

    def test_malformed_items_json(self, delivery_date):
        command = CreateOrder(
            branch_name="Kandy Branch",
            branch_location="Kandy",
            contact_person="Nimal",
            contact_phone="0812223344",
            expected_delivery_date=delivery_date,
            items="[not json",
        )
        with pytest.raises(ValidationError) as exc:
            current_domain.process(command, asynchronous=False)

        assert exc.value.messages == {"items": ["Items must be valid JSON"]}

    def test_missing_items(self, delivery_date):
        command = CreateOrder(
            branch_name="Kandy Branch",
            branch_location="Kandy",
            contact_person="Nimal",
            contact_phone="0812223344",
            expected_delivery_date=delivery_date,
            items=json.dumps([]),
        )
        with pytest.raises(ValidationError) as exc:
            current_domain.process(command, asynchronous=False)

        assert exc.value.messages["items"] == ["At least one item is required"]
