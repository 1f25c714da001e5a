"""FastAPI routes for the ordering domain — orders, inventory and purchases."""

import json

from fastapi import APIRouter
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.api.schemas import (
    AcceptOrderRequest,
    AcceptOrderResponse,
    AddInventoryItemRequest,
    CreateOrderRequest,
    InventoryActivityResponse,
    InventoryItemIdResponse,
    InventoryItemResponse,
    OrderCreatedResponse,
    OrderLineResponse,
    OrderResponse,
    OrderStatsResponse,
    OrderStatusResponse,
    OrderSummaryResponse,
    PurchaseRecordedResponse,
    PurchaseResponse,
    RecordPurchaseRequest,
    RestockRequest,
    RestockResponse,
    StatusResponse,
    UpdateOrderStatusRequest,
)
from ordering.exceptions import OrderNotFound
from ordering.order.acceptance import accept_order
from ordering.order.creation import CreateOrder
from ordering.order.deletion import DeleteOrder
from ordering.order.order import Order, OrderStatus, Priority
from ordering.order.status import UpdateOrderStatus
from ordering.projections.inventory_activity import InventoryActivity
from ordering.projections.order_summary import OrderSummary
from ordering.purchase.purchase import CustomerPurchase
from ordering.purchase.recording import RecordPurchase
from ordering.stock.management import AddInventoryItem, RestockItem
from ordering.stock.stock import InventoryItem

PENDING_QUEUE_SIZE = 10
_OPEN_STATUSES = [OrderStatus.PENDING.value, OrderStatus.PROCESSING.value]


def _summary_response(summary):
    return OrderSummaryResponse(
        order_id=str(summary.order_id),
        order_number=summary.order_number,
        branch_name=summary.branch_name,
        status=summary.status,
        priority=summary.priority,
        total_quantity=summary.total_quantity,
        expected_delivery_date=summary.expected_delivery_date,
        created_at=summary.created_at,
    )


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderCreatedResponse)
async def create_order(body: CreateOrderRequest) -> OrderCreatedResponse:
    command = CreateOrder(
        branch_name=body.branch_name,
        branch_id=body.branch_id,
        branch_location=body.branch_location,
        contact_person=body.contact_person,
        contact_phone=body.contact_phone,
        expected_delivery_date=body.expected_delivery_date,
        items=json.dumps([item.model_dump() for item in body.items]),
        priority=body.priority,
        source=body.source,
        notes=body.notes,
    )
    result = current_domain.process(command, asynchronous=False)
    return OrderCreatedResponse(**result)


@order_router.get("", response_model=list[OrderSummaryResponse])
async def list_orders(status: str | None = None, limit: int = 100) -> list[OrderSummaryResponse]:
    query = current_domain.repository_for(OrderSummary)._dao.query
    if status:
        query = query.filter(status=status)
    results = query.order_by("-created_at").limit(limit).all().items
    return [_summary_response(summary) for summary in results]


@order_router.get("/pending", response_model=list[OrderSummaryResponse])
async def pending_orders() -> list[OrderSummaryResponse]:
    """Open orders, most urgent first and oldest first within a priority."""
    results = (
        current_domain.repository_for(OrderSummary)
        ._dao.query.filter(status__in=_OPEN_STATUSES)
        .order_by(["priority_rank", "created_at"])
        .limit(PENDING_QUEUE_SIZE)
        .all()
        .items
    )
    return [_summary_response(summary) for summary in results]


@order_router.get("/stats", response_model=OrderStatsResponse)
async def order_stats() -> OrderStatsResponse:
    summaries = current_domain.repository_for(OrderSummary)._dao.query.limit(None).all().items

    by_status = {status.value: 0 for status in OrderStatus}
    by_priority = {priority.value: 0 for priority in Priority}
    for summary in summaries:
        by_status[summary.status] = by_status.get(summary.status, 0) + 1
        by_priority[summary.priority] = by_priority.get(summary.priority, 0) + 1

    open_summaries = [s for s in summaries if s.status in _OPEN_STATUSES]
    return OrderStatsResponse(
        total=len(summaries),
        by_status=by_status,
        by_priority=by_priority,
        urgent_open=sum(1 for s in open_summaries if s.priority == Priority.URGENT.value),
        high_priority_open=sum(1 for s in open_summaries if s.priority == Priority.HIGH.value),
    )


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    try:
        order = current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise OrderNotFound(order_id) from None

    return OrderResponse(
        order_id=str(order.id),
        order_number=order.order_number,
        branch_name=order.branch_name,
        branch_id=str(order.branch_id) if order.branch_id else None,
        branch_location=order.branch_location,
        contact_person=order.contact_person,
        contact_phone=order.contact_phone,
        items=[
            OrderLineResponse(item_name=line.item_name, quantity=line.quantity, unit=line.unit)
            for line in order.items
        ],
        total_quantity=order.total_quantity,
        priority=order.priority,
        source=order.source,
        status=order.status,
        expected_delivery_date=order.expected_delivery_date,
        notes=order.notes,
        order_date=order.order_date,
        accepted_date=order.accepted_date,
        accepted_by=order.accepted_by,
    )


@order_router.put("/{order_id}/accept", response_model=AcceptOrderResponse)
async def accept(order_id: str, body: AcceptOrderRequest | None = None) -> AcceptOrderResponse:
    adjustments = accept_order(order_id, accepted_by=body.accepted_by if body else None)
    return AcceptOrderResponse(
        message="Order accepted and inventory updated",
        order_id=order_id,
        inventory_updates=adjustments,
    )


@order_router.put("/{order_id}/status", response_model=OrderStatusResponse)
async def update_status(order_id: str, body: UpdateOrderStatusRequest) -> OrderStatusResponse:
    command = UpdateOrderStatus(order_id=order_id, status=body.status)
    status = current_domain.process(command, asynchronous=False)
    return OrderStatusResponse(order_id=order_id, status=status)


@order_router.delete("/{order_id}", response_model=StatusResponse)
async def delete_order(order_id: str) -> StatusResponse:
    current_domain.process(DeleteOrder(order_id=order_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Inventory Router
# ---------------------------------------------------------------------------
inventory_router = APIRouter(prefix="/inventory", tags=["inventory"])


@inventory_router.post("", status_code=201, response_model=InventoryItemIdResponse)
async def add_inventory_item(body: AddInventoryItemRequest) -> InventoryItemIdResponse:
    command = AddInventoryItem(**body.model_dump())
    result = current_domain.process(command, asynchronous=False)
    return InventoryItemIdResponse(inventory_item_id=result)


@inventory_router.get("", response_model=list[InventoryItemResponse])
async def list_inventory(category: str | None = None) -> list[InventoryItemResponse]:
    query = current_domain.repository_for(InventoryItem)._dao.query
    if category:
        query = query.filter(category=category)
    items = query.order_by("name").limit(None).all().items
    return [
        InventoryItemResponse(
            inventory_item_id=str(item.id),
            name=item.name,
            quantity=item.quantity,
            unit=item.unit,
            min_stock_level=item.min_stock_level,
            max_stock_level=item.max_stock_level,
            price=item.price,
            category=item.category,
            status=item.stock_status.value,
        )
        for item in items
    ]


@inventory_router.get("/activity", response_model=list[InventoryActivityResponse])
async def inventory_activity(limit: int = 20) -> list[InventoryActivityResponse]:
    results = (
        current_domain.repository_for(InventoryActivity)._dao.query.order_by("-occurred_at").limit(limit).all().items
    )
    return [
        InventoryActivityResponse(
            order_id=str(activity.order_id),
            order_number=activity.order_number,
            action=activity.action,
            new_status=activity.new_status,
            adjustments=json.loads(activity.adjustments) if activity.adjustments else [],
            occurred_at=activity.occurred_at,
        )
        for activity in results
    ]


@inventory_router.put("/{inventory_item_id}/restock", response_model=RestockResponse)
async def restock_item(inventory_item_id: str, body: RestockRequest) -> RestockResponse:
    command = RestockItem(inventory_item_id=inventory_item_id, quantity=body.quantity)
    quantity = current_domain.process(command, asynchronous=False)
    return RestockResponse(inventory_item_id=inventory_item_id, quantity=quantity)


# ---------------------------------------------------------------------------
# Purchase Router
# ---------------------------------------------------------------------------
purchase_router = APIRouter(prefix="/purchases", tags=["purchases"])


@purchase_router.post("", status_code=201, response_model=PurchaseRecordedResponse)
async def record_purchase(body: RecordPurchaseRequest) -> PurchaseRecordedResponse:
    command = RecordPurchase(
        customer_id=body.customer_id,
        customer_name=body.customer_name,
        customer_email=body.customer_email,
        customer_phone=body.customer_phone,
        items=json.dumps([item.model_dump() for item in body.items]),
        payment_method=body.payment_method,
        delivery_address=json.dumps(body.delivery_address.model_dump()) if body.delivery_address else None,
        notes=body.notes,
    )
    result = current_domain.process(command, asynchronous=False)
    return PurchaseRecordedResponse(**result)


@purchase_router.get("/{purchase_id}", response_model=PurchaseResponse)
async def get_purchase(purchase_id: str) -> PurchaseResponse:
    purchase = current_domain.repository_for(CustomerPurchase).get(purchase_id)
    return PurchaseResponse(
        purchase_id=str(purchase.id),
        purchase_number=purchase.purchase_number,
        customer_name=purchase.customer_name,
        total_quantity=purchase.total_quantity,
        subtotal=purchase.subtotal,
        tax=purchase.tax,
        total_amount=purchase.total_amount,
        payment_method=purchase.payment_method,
        status=purchase.status,
    )
