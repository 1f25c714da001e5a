from storefront.gateway.fake_adapter import FakePurchaseGateway
from storefront.gateway.http_adapter import HttpPurchaseGateway
from storefront.gateway.port import PurchaseGateway, PurchaseResult

__all__ = ["FakePurchaseGateway", "HttpPurchaseGateway", "PurchaseGateway", "PurchaseResult"]
