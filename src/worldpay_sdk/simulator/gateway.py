"""In-memory gateway state used by the simulator app."""

import logging
import math
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from ..models.common import Address, ApiError, Entry
from ..models.enums import CurrencyCode, OrderStatus
from ..models.requests import (
    ApmRequest,
    CaptureOrderRequest,
    CardRequest,
    OrderAuthorizationRequest,
    OrderRequest,
    ThreeDSecureInfo,
    TokenRequest,
    UpdateTokenRequest,
)
from ..models.responses import (
    ApmResponse,
    CardResponse,
    OrderResponse,
    OrderSearchResponse,
    TokenResponse,
    TransferDetailResponse,
    TransferSearchResponse,
)

logger = logging.getLogger(__name__)

PAGE_SIZE = 20

# 3DS challenge outcomes that complete authorization
ACCEPTED_3DS_RESPONSE_CODES = frozenset(["IDENTIFIED", "AUTHENTICATED"])

CAPTURE_AMOUNT_EXCEEDED_MESSAGE = "Capture amount cannot be more than authorized order amount"


class GatewayError(Exception):
    """A rejected request; rendered as the gateway's error envelope."""

    def __init__(self, http_status_code: int, custom_code: str, message: str, description: Optional[str] = None):
        super().__init__(message)
        self.api_error = ApiError(
            http_status_code=http_status_code,
            custom_code=custom_code,
            message=message,
            description=description or message,
        )

    @property
    def status_code(self) -> int:
        return self.api_error.http_status_code


def luhn_valid(card_number: str) -> bool:
    digits = [int(c) for c in card_number if c.isdigit()]
    if len(digits) < 12:
        return False
    total = 0
    for index, digit in enumerate(reversed(digits)):
        if index % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


def card_type_for(card_number: str) -> str:
    """Very small BIN table covering the public test cards."""
    pan = "".join(c for c in card_number if c.isdigit())
    if pan.startswith("4"):
        return "VISA_CREDIT"
    if pan[:2] in ("51", "52", "53", "54", "55") or 2221 <= int(pan[:4] or 0) <= 2720:
        return "MASTERCARD_CREDIT"
    if pan[:2] in ("34", "37"):
        return "AMEX"
    return "UNKNOWN"


@dataclass
class SimulatedToken:
    """A tokenized payment method."""
    token: str
    payment_method: Any  # CardRequest | ApmRequest
    reusable: bool
    created_at: datetime = field(default_factory=datetime.utcnow)

    def payment_response(self) -> Any:
        method = self.payment_method
        if isinstance(method, ApmRequest):
            return ApmResponse(
                apm_name=method.apm_name,
                shopper_country_code=method.shopper_country_code,
                apm_fields=method.apm_fields,
            )
        pan = "".join(c for c in method.card_number if c.isdigit())
        return CardResponse(
            name=method.name,
            expiry_month=method.expiry_month,
            expiry_year=method.expiry_year,
            card_type=card_type_for(pan),
            masked_card_number=f"**** **** **** {pan[-4:]}",
            card_scheme_type="consumer",
            card_scheme_name=card_type_for(pan).split("_")[0],
            card_class="credit",
            prepaid="false",
        )


@dataclass
class SimulatedOrder:
    """Gateway-side record of an order."""
    order_code: str
    merchant_id: str
    token: str
    amount: int
    authorized_amount: Optional[int]
    currency_code: CurrencyCode
    status: OrderStatus
    payment_response: Any
    order_description: Optional[str] = None
    customer_order_code: Optional[str] = None
    customer_identifiers: Optional[List[Entry]] = None
    billing_address: Optional[Address] = None
    is_3ds_order: bool = False
    three_d_secure_info: Optional[ThreeDSecureInfo] = None
    redirect_url: Optional[str] = None
    one_time_3ds_token: Optional[str] = None
    refunded_amount: int = 0
    created_at: datetime = field(default_factory=datetime.utcnow)

    def to_response(self) -> OrderResponse:
        return OrderResponse(
            order_code=self.order_code,
            token=self.token,
            order_description=self.order_description,
            amount=self.amount,
            authorized_amount=self.authorized_amount,
            refunded_amount=self.refunded_amount,
            currency_code=self.currency_code,
            customer_order_code=self.customer_order_code,
            customer_identifiers=self.customer_identifiers,
            payment_status=self.status,
            payment_response=self.payment_response,
            environment="TEST",
            is_3ds_order=self.is_3ds_order,
            redirect_url=self.redirect_url,
            one_time_3ds_token=self.one_time_3ds_token,
        )


class GatewayState:
    """
    Token, order and transfer store enforcing the order lifecycle.

    Every public method either returns a response DTO or raises
    ``GatewayError``; a rejected call never modifies stored state.
    """

    def __init__(self, merchant_id: str = "sim-merchant", client_key: Optional[str] = None):
        self.merchant_id = merchant_id
        self.client_key = client_key
        self._tokens: Dict[str, SimulatedToken] = {}
        self._orders: Dict[str, SimulatedOrder] = {}
        self._transfers: Dict[str, TransferDetailResponse] = {}
        self._lock = threading.Lock()
        logger.info("GatewayState initialized")

    # Tokens

    def _check_client_key(self, client_key: str) -> None:
        if self.client_key is not None and client_key != self.client_key:
            raise GatewayError(401, "UNAUTHORIZED", "Invalid client key")

    def create_token(self, request: TokenRequest) -> TokenResponse:
        self._check_client_key(request.client_key)
        method = request.payment_method
        if isinstance(method, CardRequest) and not luhn_valid(method.card_number):
            raise GatewayError(400, "INVALID_CARD_NUMBER", "Card number is invalid")
        token = SimulatedToken(
            token=f"TEST_RU_{uuid.uuid4()}" if request.reusable else f"TEST_SU_{uuid.uuid4()}",
            payment_method=method,
            reusable=request.reusable,
        )
        with self._lock:
            self._tokens[token.token] = token
        return TokenResponse(
            token=token.token, reusable=token.reusable, payment_method=token.payment_response()
        )

    def _get_token(self, token: Optional[str]) -> SimulatedToken:
        stored = self._tokens.get(token or "")
        if stored is None:
            raise GatewayError(400, "TKN_NOT_FOUND", "Token not found", f"Token {token} does not exist")
        return stored

    def get_token(self, token: str) -> TokenResponse:
        with self._lock:
            stored = self._get_token(token)
        return TokenResponse(
            token=stored.token, reusable=stored.reusable, payment_method=stored.payment_response()
        )

    def update_token(self, token: str, request: UpdateTokenRequest) -> None:
        self._check_client_key(request.client_key)
        with self._lock:
            stored = self._get_token(token)
            if isinstance(stored.payment_method, CardRequest):
                stored.payment_method = stored.payment_method.model_copy(update={"cvc": request.cvc})

    def delete_token(self, token: str) -> None:
        with self._lock:
            self._get_token(token)
            del self._tokens[token]

    # Orders

    def _get_order(self, order_code: str) -> SimulatedOrder:
        order = self._orders.get(order_code)
        if order is None:
            raise GatewayError(404, "ORDER_NOT_FOUND", "Order not found", f"Order {order_code} does not exist")
        return order

    @staticmethod
    def _require_status(order: SimulatedOrder, expected: OrderStatus, action: str) -> None:
        if order.status != expected:
            raise GatewayError(
                409,
                "ORDER_INVALID_STATE",
                f"Cannot {action} order in status {order.status.value}",
                f"Order {order.order_code} must be {expected.value} to {action}",
            )

    def create_order(self, request: OrderRequest) -> OrderResponse:
        with self._lock:
            token = self._get_token(request.token)
            if request.is_3ds_order and request.three_d_secure_info is None:
                raise GatewayError(
                    400, "THREE_DS_INFO_REQUIRED", "threeDSecureInfo is required for a 3DS order"
                )

            order_code = str(uuid.uuid4())
            if request.authorize_only:
                status, amount, authorized = OrderStatus.AUTHORIZED, 0, request.amount
            elif request.is_3ds_order:
                status, amount, authorized = OrderStatus.PRE_AUTHORIZED, request.amount, None
            else:
                status, amount, authorized = OrderStatus.SUCCESS, request.amount, request.amount

            order = SimulatedOrder(
                order_code=order_code,
                merchant_id=self.merchant_id,
                token=token.token,
                amount=amount,
                authorized_amount=authorized,
                currency_code=request.currency_code,
                status=status,
                payment_response=token.payment_response(),
                order_description=request.order_description,
                customer_order_code=request.customer_order_code,
                customer_identifiers=request.customer_identifiers,
                billing_address=request.billing_address,
                is_3ds_order=request.is_3ds_order,
                three_d_secure_info=request.three_d_secure_info,
            )
            if status == OrderStatus.PRE_AUTHORIZED:
                order.redirect_url = f"https://secure-test.worldpay.com/3ds/{order_code}"
                order.one_time_3ds_token = f"PRE_3DS_{uuid.uuid4().hex}"

            if not token.reusable:
                del self._tokens[token.token]
            self._orders[order_code] = order

        logger.info(f"Simulated order {order_code} created with status {status.value}")
        return order.to_response()

    def authorize_3ds(self, order_code: str, request: OrderAuthorizationRequest) -> OrderResponse:
        with self._lock:
            order = self._get_order(order_code)
            self._require_status(order, OrderStatus.PRE_AUTHORIZED, "authorize")
            if request.three_d_secure_info is None:
                raise GatewayError(
                    400, "THREE_DS_INFO_REQUIRED", "threeDSecureInfo is required to authorize a 3DS order"
                )
            if request.three_d_secure_info != order.three_d_secure_info:
                raise GatewayError(
                    400,
                    "THREE_DS_INFO_REQUIRED",
                    "threeDSecureInfo does not match the info sent with the order",
                )
            if request.three_ds_response_code not in ACCEPTED_3DS_RESPONSE_CODES:
                raise GatewayError(
                    400,
                    "ORDER_INVALID_STATE",
                    f"Invalid 3DS response code: {request.three_ds_response_code}",
                )
            order.status = OrderStatus.SUCCESS
            order.authorized_amount = order.amount
            order.redirect_url = None
            order.one_time_3ds_token = None
            return order.to_response()

    def capture(self, order_code: str, request: CaptureOrderRequest) -> OrderResponse:
        with self._lock:
            order = self._get_order(order_code)
            self._require_status(order, OrderStatus.AUTHORIZED, "capture")
            amount = request.capture_amount
            if amount is None:
                amount = order.authorized_amount
            if amount > order.authorized_amount:
                raise GatewayError(400, "CAPTURE_AMOUNT_EXCEEDED", CAPTURE_AMOUNT_EXCEEDED_MESSAGE)
            order.amount = amount
            order.status = OrderStatus.SUCCESS
            return order.to_response()

    def cancel(self, order_code: str) -> None:
        with self._lock:
            order = self._get_order(order_code)
            self._require_status(order, OrderStatus.AUTHORIZED, "cancel")
            order.status = OrderStatus.CANCELLED

    def refund(self, order_code: str, amount: Optional[int] = None) -> None:
        """Refund bookkeeping only: the payment status stays SUCCESS."""
        with self._lock:
            order = self._get_order(order_code)
            self._require_status(order, OrderStatus.SUCCESS, "refund")
            remaining = order.amount - order.refunded_amount
            if amount is None:
                amount = remaining
            if amount <= 0 or amount > remaining:
                raise GatewayError(
                    400, "REFUND_AMOUNT_EXCEEDED", "Refund amount cannot be more than the captured amount"
                )
            order.refunded_amount += amount

    def find_order(self, order_code: str) -> OrderResponse:
        with self._lock:
            return self._get_order(order_code).to_response()

    def search_orders(self, merchant_id: str, page_number: int) -> OrderSearchResponse:
        with self._lock:
            matching = [o for o in self._orders.values() if o.merchant_id == merchant_id]
            page, total_pages = _paginate(matching, page_number)
            return OrderSearchResponse(
                orders=[o.to_response() for o in page],
                page_number=page_number,
                total_pages=total_pages,
                total_orders=len(matching),
            )

    # Transfers

    def add_transfer(
        self,
        amount: int,
        currency_code: CurrencyCode = CurrencyCode.GBP,
        merchant_id: Optional[str] = None,
        transfer_id: Optional[str] = None,
        status: str = "COMPLETED",
    ) -> TransferDetailResponse:
        """Seed a transfer (transfers are created by settlement, not by the API)."""
        transfer = TransferDetailResponse(
            transfer_id=transfer_id or str(uuid.uuid4()),
            merchant_id=merchant_id or self.merchant_id,
            amount=amount,
            currency_code=currency_code,
            status=status,
            transfer_date=datetime.utcnow().date().isoformat(),
            reference=f"TRF-{uuid.uuid4().hex[:8].upper()}",
        )
        with self._lock:
            self._transfers[transfer.transfer_id] = transfer
        return transfer

    def get_transfer(self, transfer_id: str) -> TransferDetailResponse:
        with self._lock:
            transfer = self._transfers.get(transfer_id)
        if transfer is None:
            raise GatewayError(404, "TRANSFER_NOT_FOUND", "Transfer not found")
        return transfer

    def search_transfers(self, merchant_id: str, page_number: int) -> TransferSearchResponse:
        with self._lock:
            matching = [t for t in self._transfers.values() if t.merchant_id == merchant_id]
        page, total_pages = _paginate(matching, page_number)
        return TransferSearchResponse(
            transfers=page,
            page_number=page_number,
            total_pages=total_pages,
            total_transfers=len(matching),
        )

    # Test helpers

    def get_order(self, order_code: str) -> Optional[SimulatedOrder]:
        """Get an order from in-memory storage (for testing)."""
        return self._orders.get(order_code)

    def clear(self) -> None:
        """Clear all stored tokens, orders and transfers."""
        with self._lock:
            self._tokens.clear()
            self._orders.clear()
            self._transfers.clear()


def _paginate(items: List[Any], page_number: int) -> Tuple[List[Any], int]:
    if page_number < 1:
        raise GatewayError(400, "BAD_REQUEST", "pageNumber starts at 1")
    total_pages = math.ceil(len(items) / PAGE_SIZE)
    start = (page_number - 1) * PAGE_SIZE
    return items[start:start + PAGE_SIZE], total_pages
