"""Response DTOs returned by the gateway."""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import Field

from .common import Address, CustomerIdentifiers, WorldpayModel
from .enums import CountryCode, CurrencyCode, OrderStatus


class CardResponse(WorldpayModel):
    """Card details with the PAN masked."""
    type: Literal["ObfuscatedCard"] = "ObfuscatedCard"
    name: Optional[str] = None
    expiry_month: Optional[int] = None
    expiry_year: Optional[int] = None
    card_type: Optional[str] = None
    masked_card_number: Optional[str] = None
    card_scheme_type: Optional[str] = None
    card_scheme_name: Optional[str] = None
    card_issuer: Optional[str] = None
    country_code: Optional[str] = None
    card_class: Optional[str] = None
    prepaid: Optional[str] = None
    billing_address: Optional[Address] = None


class ApmResponse(WorldpayModel):
    type: Literal["APM"] = "APM"
    apm_name: Optional[str] = None
    shopper_country_code: Optional[CountryCode] = None
    apm_fields: Dict[str, Any] = Field(default_factory=dict)


# Tagged union: callers branch on ``payment_response.type`` (or isinstance)
PaymentResponse = Annotated[Union[CardResponse, ApmResponse], Field(discriminator="type")]


class TokenResponse(WorldpayModel):
    token: str
    reusable: bool = False
    payment_method: Optional[PaymentResponse] = None


class OrderResponse(WorldpayModel):
    order_code: str
    token: Optional[str] = None
    order_description: Optional[str] = None
    amount: int = 0
    authorized_amount: Optional[int] = None
    refunded_amount: Optional[int] = None
    currency_code: Optional[CurrencyCode] = None
    settlement_currency: Optional[CurrencyCode] = None
    customer_order_code: Optional[str] = None
    customer_identifiers: Optional[CustomerIdentifiers] = None
    payment_status: Optional[OrderStatus] = None
    payment_response: Optional[PaymentResponse] = None
    environment: Optional[str] = None
    is_3ds_order: Optional[bool] = Field(default=None, alias="is3DSOrder")
    redirect_url: Optional[str] = Field(default=None, alias="redirectURL")
    one_time_3ds_token: Optional[str] = Field(default=None, alias="oneTime3DsToken")


class OrderSearchResponse(WorldpayModel):
    orders: List[OrderResponse] = Field(default_factory=list)
    page_number: int = 1
    total_pages: int = 0
    total_orders: int = 0


class TransferDetailResponse(WorldpayModel):
    transfer_id: str
    merchant_id: Optional[str] = None
    amount: int = 0
    currency_code: Optional[CurrencyCode] = None
    status: Optional[str] = None
    transfer_date: Optional[str] = None
    reference: Optional[str] = None


class TransferSearchResponse(WorldpayModel):
    transfers: List[TransferDetailResponse] = Field(default_factory=list)
    page_number: int = 1
    total_pages: int = 0
    total_transfers: int = 0
