"""Tests for TokenService driven through the gateway simulator."""

import httpx
import pytest

from worldpay_sdk import WorldpayConfig, WorldpayRestClient
from worldpay_sdk.errors import InvalidTokenError, UnauthorizedError, WorldpayApiError, WorldpayValidationError
from worldpay_sdk.models import (
    ApmRequest,
    ApmResponse,
    CardRequest,
    CardResponse,
    TokenRequest,
    UpdateTokenRequest,
)


class TestCreateToken:
    """Tests for TokenService.create."""

    def test_create_card_token(self, client, card_request, config):
        """Test that a card token carries masked card details."""
        response = client.token_service.create(
            TokenRequest(payment_method=card_request, client_key=config.client_key)
        )

        assert response.token.startswith("TEST_SU_")
        assert response.reusable is False
        assert isinstance(response.payment_method, CardResponse)
        assert response.payment_method.masked_card_number == "**** **** **** 4444"
        assert response.payment_method.card_type == "MASTERCARD_CREDIT"

    def test_create_reusable_token(self, client, card_request, config):
        response = client.token_service.create(
            TokenRequest(payment_method=card_request, client_key=config.client_key, reusable=True)
        )

        assert response.token.startswith("TEST_RU_")
        assert response.reusable is True

    def test_create_apm_token(self, client, config):
        """Test that APM tokens come back as ApmResponse."""
        response = client.token_service.create(TokenRequest(
            payment_method=ApmRequest(apm_name="paypal", shopper_country_code="GB"),
            client_key=config.client_key,
        ))

        assert isinstance(response.payment_method, ApmResponse)
        assert response.payment_method.apm_name == "paypal"

    def test_invalid_card_number(self, client, config):
        """Test that a PAN failing the Luhn check is rejected."""
        card = CardRequest(name="x", card_number="5555 5555 5555 4445", expiry_month=1, expiry_year=2030)

        with pytest.raises(WorldpayApiError) as exc_info:
            client.token_service.create(TokenRequest(payment_method=card, client_key=config.client_key))

        assert exc_info.value.api_error.custom_code == "INVALID_CARD_NUMBER"

    def test_wrong_client_key(self, client, card_request):
        with pytest.raises(UnauthorizedError):
            client.token_service.create(TokenRequest(payment_method=card_request, client_key="T_C_wrong"))

    def test_token_url_override(self):
        """Test that tokens are posted to the configured token URL."""
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            return httpx.Response(200, json={"token": "TEST_SU_1", "reusable": False})

        config = WorldpayConfig(
            service_key="T_S_key",
            token_url="https://tokens.example.com/v1/tokens",
        )
        http_client = httpx.Client(transport=httpx.MockTransport(handler))
        client = WorldpayRestClient(config, http_client=http_client)

        response = client.token_service.create(TokenRequest(
            payment_method=ApmRequest(apm_name="paypal"), client_key="T_C_key"
        ))

        assert seen["url"] == "https://tokens.example.com/v1/tokens"
        assert response.token == "TEST_SU_1"


class TestManageToken:
    """Tests for TokenService.get, update and delete."""

    def test_get_token(self, client, create_token):
        token = create_token(reusable=True)

        response = client.token_service.get(token)

        assert response.token == token
        assert response.payment_method.masked_card_number.endswith("4444")

    def test_update_cvc(self, client, create_token, config, gateway_state):
        """Test that a new CVC is attached to a reusable token."""
        token = create_token(reusable=True)

        client.token_service.update(token, UpdateTokenRequest(client_key=config.client_key, cvc="321"))

        assert gateway_state._tokens[token].payment_method.cvc == "321"

    def test_delete_token(self, client, create_token):
        """Test that a deleted token can no longer be read."""
        token = create_token(reusable=True)

        client.token_service.delete(token)

        with pytest.raises(InvalidTokenError):
            client.token_service.get(token)

    def test_deleted_token_cannot_place_order(self, client, create_token, order_request):
        token = create_token()
        client.token_service.delete(token)
        order_request.token = token

        with pytest.raises(InvalidTokenError):
            client.order_service.create(order_request)

    def test_get_blank_token_rejected_locally(self, client):
        with pytest.raises(WorldpayValidationError):
            client.token_service.get("")
