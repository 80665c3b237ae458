"""Order resource: create, 3-D Secure authorization, capture, refund, cancel."""

import logging
from typing import Optional

from ..errors import WorldpayValidationError
from ..models.requests import (
    CaptureOrderRequest,
    OrderAuthorizationRequest,
    OrderRequest,
    RefundOrderRequest,
)
from ..models.responses import OrderResponse, OrderSearchResponse
from .base import ResourceService

logger = logging.getLogger(__name__)


class OrderService(ResourceService):
    """Client for ``/orders``.

    The gateway owns the order lifecycle::

        create --(3DS)--------> PRE_AUTHORIZED --authorize_3ds--> SUCCESS
        create --(authorize)--> AUTHORIZED --capture--> SUCCESS
                                AUTHORIZED --cancel---> CANCELLED
        create ---------------> SUCCESS --refund--> (gateway bookkeeping)

    No state is tracked locally. Calling an operation from the wrong
    status surfaces the gateway's ``InvalidStateError`` unchanged.
    """

    resource = "orders"

    def create(self, order_request: OrderRequest) -> OrderResponse:
        """Place an order against a previously issued token.

        Args:
            order_request: Order details. ``token`` must be unconsumed and,
                when ``is_3ds_order`` is set, ``three_d_secure_info`` present.

        Returns:
            The created order. Status is AUTHORIZED for authorize-only
            orders, PRE_AUTHORIZED for 3DS orders, SUCCESS otherwise.

        Raises:
            InvalidTokenError: Token unknown, expired or already used.
            InvalidThreeDSecureInfoError: 3DS order without shopper info.
        """
        data = self._request("POST", self._url(), body=order_request)
        order = self._parse(OrderResponse, data)
        logger.info(f"Created order {order.order_code} with status {order.payment_status}")
        return order

    def authorize_3ds(
        self,
        order_code: str,
        authorization_request: OrderAuthorizationRequest,
    ) -> OrderResponse:
        """Complete the 3-D Secure challenge of a PRE_AUTHORIZED order.

        Raises:
            InvalidStateError: Order is not PRE_AUTHORIZED or the challenge
                response code was rejected.
        """
        self._require_id(order_code, "order_code")
        data = self._request("PUT", self._url(order_code), body=authorization_request)
        order = self._parse(OrderResponse, data)
        logger.info(f"Authorized 3DS order {order_code}: {order.payment_status}")
        return order

    def capture(self, capture_request: CaptureOrderRequest, order_code: str) -> OrderResponse:
        """Settle an AUTHORIZED order, fully or partially.

        Leaving ``capture_amount`` unset captures the whole authorized amount.

        Raises:
            CaptureAmountExceededError: Amount above the authorized amount.
            InvalidStateError: Order is not AUTHORIZED.
        """
        self._require_id(order_code, "order_code")
        amount = capture_request.capture_amount
        if amount is not None and amount <= 0:
            raise WorldpayValidationError("capture_amount must be positive", field="capture_amount")
        data = self._request("POST", self._url(order_code, "capture"), body=capture_request)
        order = self._parse(OrderResponse, data)
        logger.info(f"Captured {order.amount} for order {order_code}")
        return order

    def cancel(self, order_code: str) -> None:
        """Release the funds held by an AUTHORIZED order."""
        self._require_id(order_code, "order_code")
        self._request("DELETE", self._url(order_code))
        logger.info(f"Cancelled order {order_code}")

    def refund(self, order_code: str, amount: Optional[int] = None) -> None:
        """Refund a SUCCESS order; ``amount=None`` refunds everything captured."""
        self._require_id(order_code, "order_code")
        body = None
        if amount is not None:
            if amount <= 0:
                raise WorldpayValidationError("refund amount must be positive", field="amount")
            body = RefundOrderRequest(refund_amount=amount)
        self._request("POST", self._url(order_code, "refund"), body=body)
        logger.info(f"Refunded {'full amount' if amount is None else amount} for order {order_code}")

    def find_order(self, order_code: str) -> OrderResponse:
        """Fetch the current snapshot of an order."""
        self._require_id(order_code, "order_code")
        return self._parse(OrderResponse, self._request("GET", self._url(order_code)))

    def search(self, merchant_id: str, page_number: int = 1) -> OrderSearchResponse:
        """List a merchant's orders, one page at a time (pages start at 1)."""
        self._require_id(merchant_id, "merchant_id")
        if page_number < 1:
            raise WorldpayValidationError("page_number starts at 1", field="page_number")
        data = self._request(
            "GET", self._url(), params={"merchantId": merchant_id, "pageNumber": page_number}
        )
        return self._parse(OrderSearchResponse, data)
