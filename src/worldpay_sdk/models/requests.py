"""Request DTOs sent to the gateway."""

from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import Field

from .common import Address, CustomerIdentifiers, WorldpayModel
from .enums import CountryCode, CurrencyCode, OrderType


class CardRequest(WorldpayModel):
    type: Literal["Card"] = "Card"
    name: str
    expiry_month: int = Field(ge=1, le=12)
    expiry_year: int
    card_number: str
    cvc: Optional[str] = None
    issue_number: Optional[str] = None
    start_month: Optional[int] = None
    start_year: Optional[int] = None


class ApmRequest(WorldpayModel):
    """Alternative payment method (PayPal, giropay, ...)."""
    type: Literal["APM"] = "APM"
    apm_name: str
    shopper_country_code: Optional[CountryCode] = None
    apm_fields: Dict[str, Any] = Field(default_factory=dict)


PaymentMethodRequest = Annotated[Union[CardRequest, ApmRequest], Field(discriminator="type")]


class TokenRequest(WorldpayModel):
    payment_method: PaymentMethodRequest
    client_key: str
    reusable: bool = False


class UpdateTokenRequest(WorldpayModel):
    """Attach a fresh CVC to an existing token."""
    client_key: str
    cvc: str


class ThreeDSecureInfo(WorldpayModel):
    """Shopper session metadata required by the 3-D Secure challenge."""
    shopper_ip_address: Optional[str] = None
    shopper_session_id: Optional[str] = None
    shopper_user_agent: Optional[str] = None
    shopper_accept_header: Optional[str] = None


class OrderRequest(WorldpayModel):
    token: Optional[str] = None
    order_description: Optional[str] = None
    amount: int = Field(gt=0)  # minor units
    currency_code: CurrencyCode
    name: Optional[str] = None
    billing_address: Optional[Address] = None
    delivery_address: Optional[Address] = None
    customer_identifiers: Optional[CustomerIdentifiers] = None
    customer_order_code: Optional[str] = None
    order_type: OrderType = OrderType.ECOM
    settlement_currency: Optional[CurrencyCode] = None
    shopper_email_address: Optional[str] = None
    shopper_language_code: Optional[str] = None
    is_3ds_order: bool = Field(default=False, alias="is3DSOrder")
    authorize_only: bool = False
    three_d_secure_info: Optional[ThreeDSecureInfo] = None


class OrderAuthorizationRequest(WorldpayModel):
    three_ds_response_code: str = Field(alias="threeDSResponseCode")
    three_d_secure_info: Optional[ThreeDSecureInfo] = None


class CaptureOrderRequest(WorldpayModel):
    """Omitting ``capture_amount`` captures the full authorized amount."""
    capture_amount: Optional[int] = None


class RefundOrderRequest(WorldpayModel):
    refund_amount: Optional[int] = None
