"""Shared test fixtures and configuration."""

import pytest
from fastapi.testclient import TestClient

from worldpay_sdk import (
    Address,
    CardRequest,
    CountryCode,
    CurrencyCode,
    Entry,
    OrderRequest,
    ThreeDSecureInfo,
    TokenRequest,
    WorldpayConfig,
    WorldpayRestClient,
)
from worldpay_sdk.simulator import GatewayState, create_app

TEST_MASTERCARD_NUMBER = "5555 5555 5555 4444"
TEST_CVC = "123"

SIM_SERVICE_KEY = "T_S_test_service_key"
SIM_CLIENT_KEY = "T_C_test_client_key"
SIM_MERCHANT_ID = "sim-merchant-001"


@pytest.fixture
def gateway_state():
    """Fresh in-memory gateway for each test."""
    return GatewayState(merchant_id=SIM_MERCHANT_ID, client_key=SIM_CLIENT_KEY)


@pytest.fixture
def gateway_app(gateway_state):
    return create_app(state=gateway_state, service_key=SIM_SERVICE_KEY)


@pytest.fixture
def http_client(gateway_app):
    """httpx client routed into the simulator app."""
    with TestClient(gateway_app) as client:
        yield client


@pytest.fixture
def config():
    return WorldpayConfig(
        service_key=SIM_SERVICE_KEY,
        client_key=SIM_CLIENT_KEY,
        merchant_id=SIM_MERCHANT_ID,
    )


@pytest.fixture
def client(config, http_client):
    return WorldpayRestClient(config, http_client=http_client)


@pytest.fixture
def order_service(client):
    return client.order_service


@pytest.fixture
def card_request():
    """Mastercard test card used throughout the suite."""
    return CardRequest(
        name="python client",
        card_number=TEST_MASTERCARD_NUMBER,
        cvc=TEST_CVC,
        expiry_month=2,
        expiry_year=2018,
    )


@pytest.fixture
def create_token(client, card_request):
    """Return a factory that tokenizes the test card."""
    def _create(reusable: bool = False) -> str:
        token_request = TokenRequest(
            payment_method=card_request,
            client_key=SIM_CLIENT_KEY,
            reusable=reusable,
        )
        return client.token_service.create(token_request).token
    return _create


@pytest.fixture
def order_request():
    """Order for 19.99 GBP without 3DS."""
    return OrderRequest(
        amount=1999,
        currency_code=CurrencyCode.GBP,
        name="test name",
        order_description="test description",
        billing_address=Address(
            address1="line 1",
            address2="line 2",
            city="city",
            country_code=CountryCode.GB,
            postal_code="AB1 2CD",
        ),
        customer_identifiers=[Entry(key="test key 1", value="test value 1")],
    )


@pytest.fixture
def three_d_secure_info():
    return ThreeDSecureInfo(
        shopper_accept_header="text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        shopper_ip_address="195.35.90.111",
        shopper_session_id="021ui8ib1",
        shopper_user_agent=(
            "Mozilla/5.0 (Windows; U; Windows NT 5.1; en-GB; rv:1.9.1.5) "
            "Gecko/20091102 Firefox/3.5.5 (.NET CLR 3.5.30729)"
        ),
    )


@pytest.fixture
def three_ds_order_request(order_request, three_d_secure_info):
    return order_request.model_copy(
        update={"is_3ds_order": True, "three_d_secure_info": three_d_secure_info}
    )
