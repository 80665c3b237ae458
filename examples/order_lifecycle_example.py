"""
Order lifecycle walkthrough (server-side). Runs against the in-process gateway
simulator unless WORLDPAY_SERVICE_KEY and WORLDPAY_CLIENT_KEY are set, in which
case it talks to the live API.
"""
import logging
import os

from fastapi.testclient import TestClient

from worldpay_sdk import (
    CaptureOrderRequest,
    CardRequest,
    CurrencyCode,
    OrderRequest,
    TokenRequest,
    WorldpayConfig,
    WorldpayRestClient,
)
from worldpay_sdk.errors import WorldpayApiError
from worldpay_sdk.simulator import GatewayState, create_app


def build_client() -> WorldpayRestClient:
    if os.getenv("WORLDPAY_SERVICE_KEY") and os.getenv("WORLDPAY_CLIENT_KEY"):
        return WorldpayRestClient(WorldpayConfig.from_env())
    app = create_app(GatewayState(client_key="T_C_example"), service_key="T_S_example")
    config = WorldpayConfig(service_key="T_S_example", client_key="T_C_example")
    return WorldpayRestClient(config, http_client=TestClient(app))


def run():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    client = build_client()

    token = client.token_service.create(TokenRequest(
        payment_method=CardRequest(
            name="example shopper",
            card_number="5555 5555 5555 4444",
            cvc="123",
            expiry_month=2,
            expiry_year=2018,
        ),
        client_key=client.config.client_key,
    )).token

    order = client.order_service.create(OrderRequest(
        token=token,
        amount=1999,
        currency_code=CurrencyCode.GBP,
        order_description="example order",
        authorize_only=True,
    ))
    print("Authorized:", order.order_code, order.payment_status.value, order.authorized_amount)

    try:
        client.order_service.capture(CaptureOrderRequest(capture_amount=5000), order.order_code)
    except WorldpayApiError as e:
        print("Rejected:", e.api_error.custom_code, e)

    client.order_service.capture(CaptureOrderRequest(capture_amount=900), order.order_code)
    current = client.order_service.find_order(order.order_code)
    print("Captured:", current.payment_status.value, current.amount, "of", current.authorized_amount)

    client.order_service.refund(order.order_code, 100)
    print("Refunded 100")


if __name__ == "__main__":
    run()
