"""Domain events for the CustomerPurchase aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from ordering.domain import ordering


@ordering.event(part_of="CustomerPurchase")
class PurchaseRecorded:
    """A storefront checkout was recorded as a customer purchase."""

    __version__ = 1

    purchase_id = Identifier(required=True)
    purchase_number = String(required=True)
    customer_id = String()
    customer_name = String(required=True)
    items = Text(required=True)  # JSON: list of {item_name, quantity, unit_price, total_price}
    total_quantity = Integer(required=True)
    total_amount = Float(required=True)
    payment_method = String(required=True)
    recorded_at = DateTime(required=True)
