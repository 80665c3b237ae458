"""Wire DTOs mirroring the gateway's JSON schema."""

from .enums import CountryCode, CurrencyCode, OrderStatus, OrderType
from .common import Address, ApiError, Entry, WorldpayModel
from .requests import (
    ApmRequest,
    CaptureOrderRequest,
    CardRequest,
    OrderAuthorizationRequest,
    OrderRequest,
    RefundOrderRequest,
    ThreeDSecureInfo,
    TokenRequest,
    UpdateTokenRequest,
)
from .responses import (
    ApmResponse,
    CardResponse,
    OrderResponse,
    OrderSearchResponse,
    TokenResponse,
    TransferDetailResponse,
    TransferSearchResponse,
)

__all__ = [
    # Enumerations
    "CountryCode",
    "CurrencyCode",
    "OrderStatus",
    "OrderType",
    # Shared
    "Address",
    "ApiError",
    "Entry",
    "WorldpayModel",
    # Requests
    "ApmRequest",
    "CaptureOrderRequest",
    "CardRequest",
    "OrderAuthorizationRequest",
    "OrderRequest",
    "RefundOrderRequest",
    "ThreeDSecureInfo",
    "TokenRequest",
    "UpdateTokenRequest",
    # Responses
    "ApmResponse",
    "CardResponse",
    "OrderResponse",
    "OrderSearchResponse",
    "TokenResponse",
    "TransferDetailResponse",
    "TransferSearchResponse",
]
