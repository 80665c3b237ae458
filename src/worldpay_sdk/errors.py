"""Error taxonomy for the Worldpay client.

Every failure crosses the client boundary as a ``WorldpayError`` subclass.
Remote failures carry the gateway's ``ApiError`` envelope untouched so
callers can branch on ``api_error.custom_code``.
"""

from typing import Dict, Optional, Type

from .models.common import ApiError


class WorldpayError(Exception):
    """Base class for all client errors."""


class WorldpayNetworkError(WorldpayError):
    """The HTTP exchange could not be completed (connect, read, timeout)."""


class WorldpayValidationError(WorldpayError):
    """Input rejected locally before any request was sent."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class WorldpayApiError(WorldpayError):
    """The gateway answered with a non-2xx status."""

    custom_code: Optional[str] = None

    def __init__(self, api_error: ApiError):
        super().__init__(f"API error: {api_error.message}")
        self.api_error = api_error

    @property
    def http_status_code(self) -> Optional[int]:
        return self.api_error.http_status_code


class InvalidTokenError(WorldpayApiError):
    custom_code = "TKN_NOT_FOUND"


class InvalidThreeDSecureInfoError(WorldpayApiError):
    custom_code = "THREE_DS_INFO_REQUIRED"


class InvalidStateError(WorldpayApiError):
    """Operation not allowed from the order's current payment status."""

    custom_code = "ORDER_INVALID_STATE"


class CaptureAmountExceededError(WorldpayApiError):
    custom_code = "CAPTURE_AMOUNT_EXCEEDED"


class RefundAmountExceededError(WorldpayApiError):
    custom_code = "REFUND_AMOUNT_EXCEEDED"


class OrderNotFoundError(WorldpayApiError):
    custom_code = "ORDER_NOT_FOUND"


class UnauthorizedError(WorldpayApiError):
    custom_code = "UNAUTHORIZED"


ERRORS_BY_CUSTOM_CODE: Dict[str, Type[WorldpayApiError]] = {
    cls.custom_code: cls
    for cls in (
        InvalidTokenError,
        InvalidThreeDSecureInfoError,
        InvalidStateError,
        CaptureAmountExceededError,
        RefundAmountExceededError,
        OrderNotFoundError,
        UnauthorizedError,
    )
}


def error_from_api_error(api_error: ApiError) -> WorldpayApiError:
    """Build the most specific exception for an error envelope.

    Unknown custom codes fall back to ``WorldpayApiError``.
    """
    error_class = ERRORS_BY_CUSTOM_CODE.get(api_error.custom_code or "", WorldpayApiError)
    return error_class(api_error)
