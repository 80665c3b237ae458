# worldpay_sdk package
__version__ = "0.1.0"

from .config import WorldpayConfig
from .client import WorldpayRestClient
from .errors import (
    WorldpayError,
    WorldpayNetworkError,
    WorldpayValidationError,
    WorldpayApiError,
    InvalidTokenError,
    InvalidThreeDSecureInfoError,
    InvalidStateError,
    CaptureAmountExceededError,
    RefundAmountExceededError,
    OrderNotFoundError,
    UnauthorizedError,
)
from .services import OrderService, TokenService, TransferService
from .models import (
    Address,
    ApiError,
    CaptureOrderRequest,
    CardRequest,
    CardResponse,
    CountryCode,
    CurrencyCode,
    Entry,
    OrderAuthorizationRequest,
    OrderRequest,
    OrderResponse,
    OrderStatus,
    ThreeDSecureInfo,
    TokenRequest,
    TokenResponse,
)
