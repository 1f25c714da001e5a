"""HTTP purchase gateway backed by the AquaLink ``POST /purchases`` endpoint."""

import requests
import structlog

from storefront.exceptions import OrderServiceUnavailable
from storefront.gateway.port import PurchaseGateway, PurchaseResult

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT = 10.0


class HttpPurchaseGateway(PurchaseGateway):
    def __init__(self, base_url: str, timeout: float = DEFAULT_TIMEOUT, session: requests.Session | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def submit_purchase(self, payload: dict) -> PurchaseResult:
        url = f"{self.base_url}/purchases"
        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Purchase submission failed to reach service", url=url, error=str(exc))
            raise OrderServiceUnavailable(f"Ordering service unreachable: {exc}") from exc

        if response.status_code >= 500:
            logger.warning("Purchase service error", url=url, status_code=response.status_code)
            raise OrderServiceUnavailable(f"Ordering service returned {response.status_code}")

        try:
            body = response.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            body = {}

        if 200 <= response.status_code < 300 and body.get("success") is True:
            return PurchaseResult(
                success=True,
                purchase_id=body.get("purchase_id"),
                purchase_number=body.get("purchase_number"),
                message=body.get("message"),
            )

        error = body.get("error")
        return PurchaseResult(
            success=False,
            message=error if isinstance(error, str) else f"Purchase rejected ({response.status_code})",
            errors=error if isinstance(error, dict) else None,
        )
