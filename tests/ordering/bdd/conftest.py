"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.order.order import Order
from ordering.stock.management import AddInventoryItem
from ordering.stock.stock import InventoryItem
from protean import current_domain
from pytest_bdd import given, parsers, then


@pytest.fixture
def outcome():
    """Holds the result or exception of the When step."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the factory holds {quantity:d} "{name}"'))
def _(quantity, name):
    current_domain.process(AddInventoryItem(name=name, quantity=quantity), asynchronous=False)


@given(parsers.cfparse('a pending order for {quantity:d} "{name}"'), target_fixture="order_id")
def _(place_order, quantity, name):
    return place_order(items=[{"item_name": name, "quantity": quantity}])


@given(
    parsers.cfparse('a pending order with lines {first_qty:d} "{first}" and {second_qty:d} "{second}"'),
    target_fixture="order_id",
)
def _(place_order, first_qty, first, second_qty, second):
    return place_order(
        items=[
            {"item_name": first, "quantity": first_qty},
            {"item_name": second, "quantity": second_qty},
        ]
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def _(order_id, status):
    assert current_domain.repository_for(Order).get(order_id).status == status


@then(parsers.cfparse('the factory holds {quantity:d} "{name}" after acceptance'))
def _(quantity, name):
    item = current_domain.repository_for(InventoryItem)._dao.query.filter(name=name).all().first
    assert item.quantity == quantity
