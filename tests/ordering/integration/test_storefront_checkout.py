"""Integration tests for the storefront checkout against the purchases API."""

import pytest
from ordering.purchase.purchase import CustomerPurchase
from protean import current_domain
from storefront.cart import CartStore, MemoryStorage, Product
from storefront.exceptions import CheckoutRejected
from storefront.gateway import HttpPurchaseGateway


@pytest.fixture
def store(client):
    # TestClient speaks the same post(url, json=..., timeout=...) interface as a requests session
    return CartStore(MemoryStorage(), HttpPurchaseGateway("http://testserver", session=client))


class TestStorefrontCheckout:
    def test_checkout_records_purchase(self, store):
        store.add(Product(id="p-1", name="Water Filter", price=500.0), 2)
        store.add(Product(id="p-2", name="Tap", price=300.0))

        result = store.checkout()

        purchase = current_domain.repository_for(CustomerPurchase).get(result.purchase_id)
        assert purchase.purchase_number == result.purchase_number
        assert purchase.subtotal == 1300.0
        assert purchase.notes == "Cart checkout - 2 items"
        assert store.state.is_empty

    def test_free_item_checks_out(self, store):
        store.add(Product(id="p-0", name="Free Sample", price=0.0), 1)

        result = store.checkout()

        assert result.success is True
        assert store.state.is_empty

    def test_rejected_checkout_keeps_cart(self, store):
        store.add(Product(id="p-1", name="Water Filter", price=500.0), 1)

        with pytest.raises(CheckoutRejected) as exc:
            store.checkout({"customer_email": "not-an-email"})

        assert "customer_email" in exc.value.messages
        assert store.totals().item_count == 1
