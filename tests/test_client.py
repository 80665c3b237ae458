"""Tests for WorldpayRestClient wiring."""

import httpx
import pytest

from worldpay_sdk import (
    OrderService,
    TokenService,
    TokenRequest,
    TransferService,
    WorldpayConfig,
    WorldpayRestClient,
)
from worldpay_sdk.errors import WorldpayApiError
from worldpay_sdk.models import ApmRequest


class TestWorldpayRestClient:
    """Tests for client construction."""

    def test_services_share_transport(self):
        """Test that all services are wired to the same transport."""
        client = WorldpayRestClient(WorldpayConfig(service_key="T_S_key"))

        assert isinstance(client.order_service, OrderService)
        assert isinstance(client.token_service, TokenService)
        assert isinstance(client.transfer_service, TransferService)
        assert client.order_service._transport is client.transport
        assert client.transfer_service._transport is client.transport
        client.close()

    def test_from_service_key(self):
        client = WorldpayRestClient.from_service_key("T_S_key", api_url="https://sandbox.example.com/v1")

        assert client.config.service_key == "T_S_key"
        assert client.order_service._url("abc") == "https://sandbox.example.com/v1/orders/abc"
        client.close()

    def test_order_code_is_escaped(self):
        """Test that path identifiers cannot inject extra segments."""
        client = WorldpayRestClient.from_service_key("T_S_key")

        assert client.order_service._url("a/b", "capture") == (
            "https://api.worldpay.com/v1/orders/a%2Fb/capture"
        )
        client.close()

    def test_context_manager_closes_owned_client(self):
        with WorldpayRestClient.from_service_key("T_S_key") as client:
            pass

        assert client.transport._client.is_closed

    def test_uses_supplied_http_client(self):
        """Test that requests go through a caller-supplied httpx client."""
        seen = []

        def handler(request):
            seen.append(request.url.path)
            return httpx.Response(200, json={"orderCode": "abc", "paymentStatus": "SUCCESS", "amount": 10})

        http_client = httpx.Client(transport=httpx.MockTransport(handler))
        client = WorldpayRestClient.from_service_key("T_S_key", http_client=http_client)

        order = client.order_service.find_order("abc")

        assert seen == ["/v1/orders/abc"]
        assert order.amount == 10

    def test_token_service_uses_resolved_token_url(self):
        """Test that token creation posts to the URL derived from the config."""
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            return httpx.Response(200, json={"token": "TEST_SU_1", "reusable": False})

        config = WorldpayConfig(service_key="T_S_key", api_url="https://sandbox.example.com/v1/")
        http_client = httpx.Client(transport=httpx.MockTransport(handler))
        client = WorldpayRestClient(config, http_client=http_client)

        client.token_service.create(TokenRequest(
            payment_method=ApmRequest(apm_name="paypal"), client_key="T_C_key"
        ))

        assert seen["url"] == config.resolved_token_url == "https://sandbox.example.com/v1/tokens"


class TestResponseParsing:
    """Tests for 2xx bodies that do not match the response model."""

    def client_returning(self, payload) -> WorldpayRestClient:
        http_client = httpx.Client(
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json=payload))
        )
        return WorldpayRestClient.from_service_key("T_S_key", http_client=http_client)

    @pytest.mark.parametrize("payload", [
        {"unexpected": 1},
        {"orderCode": "abc", "paymentStatus": "NOT_A_STATUS"},
        {"orderCode": "abc", "paymentResponse": {"type": "Bitcoin"}},
        [],
    ])
    def test_find_order_wrong_shape(self, payload):
        """Test that a wrongly shaped order raises INVALID_RESPONSE."""
        client = self.client_returning(payload)

        with pytest.raises(WorldpayApiError) as exc_info:
            client.order_service.find_order("abc")

        assert exc_info.value.api_error.custom_code == "INVALID_RESPONSE"
        assert "OrderResponse" in exc_info.value.api_error.message

    def test_empty_body_where_token_expected(self):
        """Test that an empty 2xx body is not treated as a token."""
        http_client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
        client = WorldpayRestClient.from_service_key("T_S_key", http_client=http_client)

        with pytest.raises(WorldpayApiError) as exc_info:
            client.token_service.get("TEST_RU_abc")

        assert exc_info.value.api_error.custom_code == "INVALID_RESPONSE"
