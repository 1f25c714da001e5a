"""Pydantic request/response schemas for the AquaLink API.

HTTP contracts for the AquaLink API, kept apart from the Protean
commands. Order and purchase requests are deliberately permissive
so the domain can report every invalid field in a single response.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class OrderItemSchema(BaseModel):
    item_name: str | None = None
    quantity: Any = None
    unit: str | None = None


class CreateOrderRequest(BaseModel):
    branch_name: str | None = None
    branch_id: str | None = None
    branch_location: str | None = None
    contact_person: str | None = None
    contact_phone: str | None = None
    expected_delivery_date: str | None = None
    items: list[OrderItemSchema] = Field(default_factory=list)
    priority: str | None = None
    source: str | None = None
    notes: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "branch_name": "Kandy Branch",
                    "branch_location": "Kandy",
                    "contact_person": "Nimal Perera",
                    "contact_phone": "+94 77 123 4567",
                    "expected_delivery_date": "2026-02-01",
                    "items": [{"item_name": "500ml Bottle", "quantity": 200}],
                    "priority": "High",
                }
            ]
        }
    }


class AcceptOrderRequest(BaseModel):
    accepted_by: str | None = None


class UpdateOrderStatusRequest(BaseModel):
    status: str


# ---------------------------------------------------------------------------
# Order Response Schemas
# ---------------------------------------------------------------------------
class OrderCreatedResponse(BaseModel):
    order_id: str
    order_number: str


class OrderLineResponse(BaseModel):
    item_name: str
    quantity: int
    unit: str


class OrderResponse(BaseModel):
    order_id: str
    order_number: str
    branch_name: str
    branch_id: str | None = None
    branch_location: str
    contact_person: str
    contact_phone: str
    items: list[OrderLineResponse]
    total_quantity: int
    priority: str
    source: str
    status: str
    expected_delivery_date: date
    notes: str | None = None
    order_date: datetime | None = None
    accepted_date: datetime | None = None
    accepted_by: str | None = None


class OrderSummaryResponse(BaseModel):
    order_id: str
    order_number: str
    branch_name: str
    status: str
    priority: str
    total_quantity: int
    expected_delivery_date: date | None = None
    created_at: datetime | None = None


class InventoryAdjustmentSchema(BaseModel):
    item_name: str
    quantity_reserved: int
    previous_quantity: int
    new_quantity: int


class AcceptOrderResponse(BaseModel):
    success: bool = True
    message: str
    order_id: str
    inventory_updates: list[InventoryAdjustmentSchema]


class OrderStatusResponse(BaseModel):
    order_id: str
    status: str


class OrderStatsResponse(BaseModel):
    total: int
    by_status: dict[str, int]
    by_priority: dict[str, int]
    urgent_open: int
    high_priority_open: int


# ---------------------------------------------------------------------------
# Inventory Schemas
# ---------------------------------------------------------------------------
class AddInventoryItemRequest(BaseModel):
    name: str
    quantity: int = Field(ge=0, default=0)
    unit: str = "pieces"
    min_stock_level: int = Field(ge=0, default=10)
    max_stock_level: int = Field(ge=0, default=100)
    price: float = Field(ge=0, default=0.0)
    category: str | None = None


class RestockRequest(BaseModel):
    quantity: int = Field(ge=1)


class InventoryItemIdResponse(BaseModel):
    inventory_item_id: str


class InventoryItemResponse(BaseModel):
    inventory_item_id: str
    name: str
    quantity: int
    unit: str
    min_stock_level: int
    max_stock_level: int
    price: float
    category: str | None = None
    status: str


class RestockResponse(BaseModel):
    inventory_item_id: str
    quantity: int


class InventoryActivityResponse(BaseModel):
    order_id: str
    order_number: str
    action: str
    new_status: str | None = None
    adjustments: list[InventoryAdjustmentSchema]
    occurred_at: datetime


# ---------------------------------------------------------------------------
# Purchase Schemas
# ---------------------------------------------------------------------------
class PurchaseItemSchema(BaseModel):
    item_name: str | None = None
    quantity: Any = None
    unit_price: Any = None


class DeliveryAddressSchema(BaseModel):
    street: str | None = None
    city: str | None = None
    postal_code: str | None = None
    country: str | None = "Sri Lanka"


class RecordPurchaseRequest(BaseModel):
    customer_id: str | None = None
    customer_name: str | None = None
    customer_email: str | None = None
    customer_phone: str | None = None
    items: list[PurchaseItemSchema] = Field(default_factory=list)
    payment_method: str | None = None
    delivery_address: DeliveryAddressSchema | None = None
    notes: str | None = None


class PurchaseRecordedResponse(BaseModel):
    success: bool = True
    message: str = "Purchase recorded"
    purchase_id: str
    purchase_number: str


class PurchaseResponse(BaseModel):
    purchase_id: str
    purchase_number: str
    customer_name: str
    total_quantity: int
    subtotal: float
    tax: float
    total_amount: float
    payment_method: str
    status: str
