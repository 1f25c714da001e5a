import json
from datetime import UTC, datetime, timedelta

import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield


@pytest.fixture
def delivery_date():
    """An ISO date one week out, always valid as an expected delivery date."""
    return (datetime.now(UTC).date() + timedelta(days=7)).isoformat()


@pytest.fixture
def stock_item():
    """Factory fixture: add an inventory item and return its id."""
    from ordering.stock.management import AddInventoryItem

    def _add(name, quantity, **overrides):
        command = AddInventoryItem(name=name, quantity=quantity, **overrides)
        return current_domain.process(command, asynchronous=False)

    return _add


@pytest.fixture
def place_order(delivery_date):
    """Factory fixture: create an order through CreateOrder and return its id."""
    from ordering.order.creation import CreateOrder

    def _place(items=None, **overrides):
        defaults = {
            "branch_name": "Kandy Branch",
            "branch_location": "12 Peradeniya Road, Kandy",
            "contact_person": "Nimal Perera",
            "contact_phone": "+94 81 222 3344",
            "expected_delivery_date": delivery_date,
            "items": json.dumps(items if items is not None else [{"item_name": "Filter X", "quantity": 2}]),
        }
        defaults.update(overrides)
        result = current_domain.process(CreateOrder(**defaults), asynchronous=False)
        return result["order_id"]

    return _place
