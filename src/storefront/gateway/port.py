"""Purchase gateway port.

The cart only knows this interface. ``HttpPurchaseGateway`` talks to the
AquaLink ``/purchases`` endpoint; ``FakePurchaseGateway`` answers locally for
tests and offline development.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class PurchaseResult:
    """Outcome of a purchase submission the service actually answered."""

    success: bool
    purchase_id: str | None = None
    purchase_number: str | None = None
    message: str | None = None
    errors: dict | None = None


class PurchaseGateway(ABC):
    """Abstract purchase gateway interface."""

    @abstractmethod
    def submit_purchase(self, payload: dict) -> PurchaseResult:
        """Send a purchase request.

        Raises:
            OrderServiceUnavailable: When the service cannot be reached or
                does not answer in time.
        """
        ...
