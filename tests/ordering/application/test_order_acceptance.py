"""Application tests for accepting orders against factory inventory."""

import threading

import pytest
from ordering.domain import ordering
from ordering.exceptions import InsufficientStock, InvalidTransition, OrderNotFound
from ordering.order.acceptance import _order_locks, accept_order
from ordering.order.order import Order, OrderStatus
from ordering.stock.stock import InventoryItem
from protean import current_domain


def _stock_of(name):
    items = current_domain.repository_for(InventoryItem)._dao.query.filter(name=name).all().items
    return items[0].quantity


def _order(order_id):
    return current_domain.repository_for(Order).get(order_id)


class TestSuccessfulAcceptance:
    def test_reserves_stock_and_accepts(self, stock_item, place_order):
        stock_item("Filter X", 10)
        order_id = place_order(items=[{"item_name": "Filter X", "quantity": 2}])

        accept_order(order_id)

        assert _stock_of("Filter X") == 8
        order = _order(order_id)
        assert order.status == OrderStatus.ACCEPTED.value
        assert order.accepted_date is not None
        assert order.accepted_by == "Factory Manager"

    def test_returns_adjustments(self, stock_item, place_order):
        stock_item("Filter X", 10)
        order_id = place_order(items=[{"item_name": "Filter X", "quantity": 2}])

        adjustments = accept_order(order_id, accepted_by="Shift Supervisor")

        assert adjustments == [
            {"item_name": "Filter X", "quantity_reserved": 2, "previous_quantity": 10, "new_quantity": 8}
        ]
        assert _order(order_id).accepted_by == "Shift Supervisor"

    def test_exact_stock_is_enough(self, stock_item, place_order):
        stock_item("Filter X", 5)
        order_id = place_order(items=[{"item_name": "Filter X", "quantity": 5}])

        accept_order(order_id)

        assert _stock_of("Filter X") == 0

    def test_repeated_lines_are_reserved_as_one(self, stock_item, place_order):
        stock_item("Filter X", 10)
        order_id = place_order(
            items=[
                {"item_name": "Filter X", "quantity": 3},
                {"item_name": "Filter X", "quantity": 4},
            ]
        )

        adjustments = accept_order(order_id)

        assert len(adjustments) == 1
        assert adjustments[0]["quantity_reserved"] == 7
        assert _stock_of("Filter X") == 3


class TestInsufficientStock:
    def test_short_item_rejects_the_order(self, stock_item, place_order):
        stock_item("Filter X", 3)
        order_id = place_order(items=[{"item_name": "Filter X", "quantity": 5}])

        with pytest.raises(InsufficientStock) as exc:
            accept_order(order_id)

        assert exc.value.shortages == [{"item_name": "Filter X", "requested": 5, "available": 3}]
        assert _stock_of("Filter X") == 3
        assert _order(order_id).status == OrderStatus.PENDING.value
        assert _order(order_id).accepted_date is None

    def test_all_or_nothing_across_lines(self, stock_item, place_order):
        stock_item("Filter X", 10)
        stock_item("Membrane RO-75", 1)
        order_id = place_order(
            items=[
                {"item_name": "Filter X", "quantity": 2},
                {"item_name": "Membrane RO-75", "quantity": 4},
            ]
        )

        with pytest.raises(InsufficientStock) as exc:
            accept_order(order_id)

        assert [s["item_name"] for s in exc.value.shortages] == ["Membrane RO-75"]
        assert _stock_of("Filter X") == 10
        assert _stock_of("Membrane RO-75") == 1

    def test_every_shortage_is_reported(self, stock_item, place_order):
        stock_item("Filter X", 1)
        order_id = place_order(
            items=[
                {"item_name": "Filter X", "quantity": 2},
                {"item_name": "Tap", "quantity": 4},
            ]
        )

        with pytest.raises(InsufficientStock) as exc:
            accept_order(order_id)

        assert exc.value.shortages == [
            {"item_name": "Filter X", "requested": 2, "available": 1},
            {"item_name": "Tap", "requested": 4, "available": 0},
        ]

    def test_order_can_be_accepted_after_restock(self, stock_item, place_order):
        from ordering.stock.management import RestockItem

        item_id = stock_item("Filter X", 3)
        order_id = place_order(items=[{"item_name": "Filter X", "quantity": 5}])
        with pytest.raises(InsufficientStock):
            accept_order(order_id)

        current_domain.process(RestockItem(inventory_item_id=item_id, quantity=7), asynchronous=False)
        accept_order(order_id)

        assert _stock_of("Filter X") == 5
        assert _order(order_id).status == OrderStatus.ACCEPTED.value


class TestAcceptanceGuards:
    def test_unknown_order(self):
        with pytest.raises(OrderNotFound):
            accept_order("missing-order")

    def test_second_accept_is_rejected(self, stock_item, place_order):
        stock_item("Filter X", 10)
        order_id = place_order(items=[{"item_name": "Filter X", "quantity": 2}])
        accept_order(order_id)

        with pytest.raises(InvalidTransition):
            accept_order(order_id)

        assert _stock_of("Filter X") == 8

    def test_non_pending_order_reports_status_not_stock(self, stock_item, place_order):
        from ordering.order.status import UpdateOrderStatus

        order_id = place_order(items=[{"item_name": "Filter X", "quantity": 2}])
        current_domain.process(UpdateOrderStatus(order_id=order_id, status="Cancelled"), asynchronous=False)

        with pytest.raises(InvalidTransition) as exc:
            accept_order(order_id)

        assert exc.value.current_status == "Cancelled"

    def test_concurrent_accepts_reserve_once(self, stock_item, place_order):
        stock_item("Filter X", 10)
        order_id = place_order(items=[{"item_name": "Filter X", "quantity": 4}])
        outcomes = []

        def _accept():
            with ordering.domain_context():
                try:
                    accept_order(order_id)
                    outcomes.append("accepted")
                except InvalidTransition:
                    outcomes.append("rejected")

        threads = [threading.Thread(target=_accept) for _ in range(2)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert sorted(outcomes) == ["accepted", "rejected"]
        assert _stock_of("Filter X") == 6


class TestAcceptanceLocks:
    def test_lock_released_after_acceptance(self, stock_item, place_order):
        stock_item("Filter X", 10)
        order_id = place_order()

        accept_order(order_id)

        assert order_id not in _order_locks

    def test_lock_released_for_unknown_order(self):
        with pytest.raises(OrderNotFound):
            accept_order("missing-order")

        assert "missing-order" not in _order_locks

    def test_no_locks_left_after_concurrent_accepts(self, stock_item, place_order):
        stock_item("Filter X", 10)
        order_id = place_order()

        def _accept():
            with ordering.domain_context():
                try:
                    accept_order(order_id)
                except InvalidTransition:
                    pass

        threads = [threading.Thread(target=_accept) for _ in range(3)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert _order_locks == {}
