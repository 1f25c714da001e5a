"""In-process purchase gateway that records payloads and answers on demand.

Switch between acceptance, rejection and an unreachable service with
``configure()``; every submitted payload is appended to ``calls``.
"""

from uuid import uuid4

from storefront.exceptions import OrderServiceUnavailable
from storefront.gateway.port import PurchaseGateway, PurchaseResult


class FakePurchaseGateway(PurchaseGateway):
    """Configurable fake purchase gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.available: bool = True
        self.failure_errors: dict = {"items": ["Purchase rejected"]}
        self.calls: list[dict] = []
        self._sequence = 0

    def configure(self, should_succeed: bool = True, available: bool = True, failure_errors: dict | None = None) -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.available = available
        if failure_errors is not None:
            self.failure_errors = failure_errors

    def submit_purchase(self, payload: dict) -> PurchaseResult:
        self.calls.append(payload)

        if not self.available:
            raise OrderServiceUnavailable("Ordering service unreachable")

        if self.should_succeed:
            self._sequence += 1
            return PurchaseResult(
                success=True,
                purchase_id=f"fake_pur_{uuid4().hex[:12]}",
                purchase_number=f"PUR-FAKE-{self._sequence:03d}",
                message="Purchase recorded",
            )
        return PurchaseResult(
            success=False,
            message="Purchase rejected",
            errors=self.failure_errors,
        )
