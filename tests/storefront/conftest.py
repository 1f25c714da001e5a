import pytest
from storefront.cart import CartStore, MemoryStorage, Product
from storefront.gateway import FakePurchaseGateway


@pytest.fixture
def filter_product():
    return Product(id="p-1", name="Water Filter", price=500.0, category="Filters")


@pytest.fixture
def tap_product():
    return Product(id="p-2", name="Tap", price=300.0, category="Fittings")


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def gateway():
    return FakePurchaseGateway()


@pytest.fixture
def store(storage, gateway):
    return CartStore(storage, gateway)
