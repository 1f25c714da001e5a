"""Errors raised by the storefront cart and checkout."""

from protean.exceptions import ProteanException, ValidationError


class EmptyCartError(ValidationError):
    """Checkout was attempted with nothing in the cart."""

    def __init__(self):
        super().__init__({"cart": ["Cannot check out an empty cart"]})


class CheckoutRejected(ValidationError):
    """The ordering service refused the purchase.

    ``messages`` holds whatever the service reported, keyed by field when the
    service returned field-level errors.
    """


class OrderServiceUnavailable(ProteanException):
    """The ordering service could not be reached or timed out."""
