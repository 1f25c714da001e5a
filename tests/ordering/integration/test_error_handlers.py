"""Integration tests for persistence failures surfacing as retryable errors."""

from unittest.mock import patch

from protean.exceptions import DatabaseError, ExpectedVersionError, TransactionError


class TestUnavailableResponses:
    def test_database_error_is_503(self, client):
        with patch("ordering.api.routes.accept_order", side_effect=DatabaseError("connection refused")):
            response = client.put("/orders/any-order/accept")

        assert response.status_code == 503
        assert response.json() == {"error": "Service temporarily unavailable, safe to retry"}

    def test_transaction_error_is_503(self, client):
        with patch("ordering.api.routes.accept_order", side_effect=TransactionError("commit failed")):
            response = client.put("/orders/any-order/accept")

        assert response.status_code == 503

    def test_version_conflict_is_409(self, client):
        with patch("ordering.api.routes.accept_order", side_effect=ExpectedVersionError("stale order")):
            response = client.put("/orders/any-order/accept")

        assert response.status_code == 409
