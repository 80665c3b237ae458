"""Tests for TransferService."""

import pytest

from worldpay_sdk.errors import WorldpayApiError, WorldpayValidationError
from worldpay_sdk.models import CurrencyCode


class TestTransferService:
    """Tests for transfer lookup and search."""

    def test_get_transfer(self, client, gateway_state):
        """Test reading a single transfer."""
        seeded = gateway_state.add_transfer(amount=12500, transfer_id="TransferId")

        response = client.transfer_service.get("TransferId")

        assert response is not None
        assert response.transfer_id == "TransferId"
        assert response.amount == 12500
        assert response.currency_code == CurrencyCode.GBP
        assert response.reference == seeded.reference

    def test_get_unknown_transfer(self, client):
        with pytest.raises(WorldpayApiError) as exc_info:
            client.transfer_service.get("missing")

        assert exc_info.value.api_error.custom_code == "TRANSFER_NOT_FOUND"
        assert exc_info.value.http_status_code == 404

    def test_search_transfers(self, client, gateway_state, config):
        """Test that search returns the merchant's transfers."""
        gateway_state.add_transfer(amount=100)
        gateway_state.add_transfer(amount=200)
        gateway_state.add_transfer(amount=300, merchant_id="other-merchant")

        response = client.transfer_service.search(config.merchant_id, 1)

        assert response is not None
        assert response.total_transfers == 2
        assert sorted(t.amount for t in response.transfers) == [100, 200]

    def test_search_second_page(self, client, gateway_state, config):
        """Test pagination over more than one page."""
        for amount in range(1, 26):
            gateway_state.add_transfer(amount=amount)

        first = client.transfer_service.search(config.merchant_id, 1)
        second = client.transfer_service.search(config.merchant_id, 2)

        assert first.total_pages == 2
        assert len(first.transfers) == 20
        assert len(second.transfers) == 5
        assert second.page_number == 2

    def test_search_empty(self, client, config):
        response = client.transfer_service.search(config.merchant_id)

        assert response.transfers == []
        assert response.total_pages == 0

    def test_search_invalid_page_rejected_locally(self, client, config):
        with pytest.raises(WorldpayValidationError) as exc_info:
            client.transfer_service.search(config.merchant_id, 0)

        assert exc_info.value.field == "page_number"
