"""CustomerPurchase aggregate — a storefront checkout recorded by the factory.

Prices come from the cart; subtotal, VAT and total are computed here so the
client never dictates the amount charged.
"""

import json
import os
import re
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Integer, String, Text, ValueObject

from ordering.domain import ordering
from ordering.purchase.events import PurchaseRecorded

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_ADDRESS_KEYS = ("street", "city", "postal_code", "country")


class PaymentMethod(Enum):
    CASH = "Cash"
    CARD = "Card"
    ONLINE = "Online"
    BANK_TRANSFER = "Bank Transfer"


class PurchaseStatus(Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    PROCESSING = "Processing"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


def vat_rate() -> float:
    return float(os.getenv("AQUALINK_VAT_RATE", "0.15"))


@ordering.value_object(part_of="CustomerPurchase")
class DeliveryAddress:
    street = String(max_length=255)
    city = String(max_length=100)
    postal_code = String(max_length=20)
    country = String(max_length=100, default="Sri Lanka")


@ordering.entity(part_of="CustomerPurchase")
class PurchaseLine:
    item_name = String(required=True, max_length=100)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    total_price = Float(required=True, min_value=0.0)


@ordering.aggregate
class CustomerPurchase:
    purchase_number = String(required=True, max_length=20, unique=True)
    customer_id = String(max_length=100)
    customer_name = String(required=True, max_length=100)
    customer_email = String(required=True, max_length=255)
    customer_phone = String(required=True, max_length=30)
    items = HasMany(PurchaseLine)
    total_quantity = Integer(default=0)
    subtotal = Float(default=0.0)
    tax = Float(default=0.0)
    total_amount = Float(default=0.0)
    payment_method = String(choices=PaymentMethod, default=PaymentMethod.CASH.value)
    delivery_address = ValueObject(DeliveryAddress)
    status = String(choices=PurchaseStatus, default=PurchaseStatus.PENDING.value)
    notes = Text()
    purchase_date = DateTime()

    @classmethod
    def record(
        cls,
        purchase_number,
        customer_name,
        customer_email,
        customer_phone,
        items_data,
        payment_method,
        customer_id=None,
        delivery_address=None,
        notes=None,
    ):
        """Validate a checkout payload and build a Pending purchase."""
        errors = {}
        if not customer_name:
            errors["customer_name"] = ["Customer name is required"]
        if not customer_email:
            errors["customer_email"] = ["Customer email is required"]
        elif not EMAIL_PATTERN.match(customer_email):
            errors["customer_email"] = ["Customer email is invalid"]
        if not customer_phone:
            errors["customer_phone"] = ["Customer phone is required"]
        if payment_method not in {m.value for m in PaymentMethod}:
            errors["payment_method"] = [f"Payment method must be one of {', '.join(m.value for m in PaymentMethod)}"]

        lines = []
        if not items_data or not isinstance(items_data, list):
            errors["items"] = ["At least one item is required"]
        else:
            for index, item in enumerate(items_data):
                item_name = item.get("item_name") if isinstance(item, dict) else None
                quantity = item.get("quantity") if isinstance(item, dict) else None
                unit_price = item.get("unit_price") if isinstance(item, dict) else None

                if not item_name:
                    errors[f"items[{index}].item_name"] = ["Item name is required"]
                if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
                    errors[f"items[{index}].quantity"] = ["Quantity must be a positive whole number"]
                if not isinstance(unit_price, (int, float)) or isinstance(unit_price, bool) or unit_price < 0:
                    errors[f"items[{index}].unit_price"] = ["Unit price cannot be negative"]
                else:
                    lines.append(
                        {
                            "item_name": item_name,
                            "quantity": quantity,
                            "unit_price": float(unit_price),
                            "total_price": round(quantity * unit_price, 2) if isinstance(quantity, int) else 0.0,
                        }
                    )

        if errors:
            raise ValidationError(errors)

        subtotal = round(sum(line["total_price"] for line in lines), 2)
        tax = round(subtotal * vat_rate(), 2)
        now = datetime.now(UTC)

        purchase = cls(
            purchase_number=purchase_number,
            customer_id=customer_id,
            customer_name=customer_name,
            customer_email=customer_email,
            customer_phone=customer_phone,
            items=[PurchaseLine(**line) for line in lines],
            total_quantity=sum(line["quantity"] for line in lines),
            subtotal=subtotal,
            tax=tax,
            total_amount=round(subtotal + tax, 2),
            payment_method=payment_method,
            delivery_address=(
                DeliveryAddress(**{key: delivery_address.get(key) for key in _ADDRESS_KEYS if delivery_address.get(key)})
                if delivery_address
                else None
            ),
            status=PurchaseStatus.PENDING.value,
            notes=notes,
            purchase_date=now,
        )

        purchase.raise_(
            PurchaseRecorded(
                purchase_id=str(purchase.id),
                purchase_number=purchase.purchase_number,
                customer_id=customer_id,
                customer_name=customer_name,
                items=json.dumps(lines),
                total_quantity=purchase.total_quantity,
                total_amount=purchase.total_amount,
                payment_method=payment_method,
                recorded_at=now,
            )
        )
        return purchase
