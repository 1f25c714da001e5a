"""Tests for the HTTP purchase gateway."""

from unittest.mock import MagicMock

import pytest
import requests
from storefront.exceptions import OrderServiceUnavailable
from storefront.gateway import HttpPurchaseGateway


def _response(status_code, body=None):
    response = MagicMock()
    response.status_code = status_code
    if body is None:
        response.json.side_effect = ValueError("no body")
    else:
        response.json.return_value = body
    return response


def _gateway(response=None, error=None):
    session = MagicMock()
    if error is not None:
        session.post.side_effect = error
    else:
        session.post.return_value = response
    return HttpPurchaseGateway("http://factory.local/", timeout=5, session=session), session


class TestHttpPurchaseGateway:
    def test_posts_to_purchases(self):
        gateway, session = _gateway(
            _response(201, {"success": True, "purchase_id": "pur-1", "purchase_number": "PUR-20260101-001"})
        )

        result = gateway.submit_purchase({"items": []})

        session.post.assert_called_once_with("http://factory.local/purchases", json={"items": []}, timeout=5)
        assert result.success is True
        assert result.purchase_number == "PUR-20260101-001"

    def test_validation_errors_are_returned(self):
        gateway, _ = _gateway(_response(400, {"error": {"customer_email": ["Customer email is invalid"]}}))

        result = gateway.submit_purchase({})

        assert result.success is False
        assert result.errors == {"customer_email": ["Customer email is invalid"]}

    def test_non_json_rejection(self):
        gateway, _ = _gateway(_response(404))

        result = gateway.submit_purchase({})

        assert result.success is False
        assert result.message == "Purchase rejected (404)"

    @pytest.mark.parametrize("error", [requests.Timeout("slow"), requests.ConnectionError("refused")])
    def test_network_failures(self, error):
        gateway, _ = _gateway(error=error)
        with pytest.raises(OrderServiceUnavailable):
            gateway.submit_purchase({})

    def test_server_errors(self):
        gateway, _ = _gateway(_response(503, {"error": "Service temporarily unavailable, safe to retry"}))
        with pytest.raises(OrderServiceUnavailable):
            gateway.submit_purchase({})

    @pytest.mark.parametrize(
        "error", [requests.exceptions.ChunkedEncodingError("cut off"), requests.TooManyRedirects("loop")]
    )
    def test_other_transport_failures(self, error):
        gateway, _ = _gateway(error=error)
        with pytest.raises(OrderServiceUnavailable):
            gateway.submit_purchase({})

    def test_non_object_body(self):
        gateway, _ = _gateway(_response(201, ["unexpected"]))

        result = gateway.submit_purchase({})

        assert result.success is False
        assert result.message == "Purchase rejected (201)"
