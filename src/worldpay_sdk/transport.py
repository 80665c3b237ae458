"""HTTP transport: one blocking request/response exchange per call."""

import logging
from typing import Any, Dict, Optional, Tuple

import httpx
from pydantic import ValidationError

from . import __version__
from .config import DEFAULT_TIMEOUT
from .errors import WorldpayNetworkError, error_from_api_error
from .models.common import ApiError

logger = logging.getLogger(__name__)

USER_AGENT = f"worldpay-python/{__version__}"

# Masked before a request body is written to the debug log
SENSITIVE_FIELDS = frozenset([
    "cardNumber",
    "cvc",
    "clientKey",
    "token",
])


def sanitize_body(body: Any) -> Any:
    """Return a copy of ``body`` with sensitive values masked."""
    if isinstance(body, dict):
        return {
            key: "***" if key in SENSITIVE_FIELDS else sanitize_body(value)
            for key, value in body.items()
        }
    if isinstance(body, list):
        return [sanitize_body(item) for item in body]
    return body


def api_error_from_response(response: httpx.Response) -> ApiError:
    """Deserialize a non-2xx response into exactly one ``ApiError``.

    Bodies that are not a JSON error envelope still produce an ``ApiError``
    built from the status code and raw text.
    """
    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict) and ("customCode" in payload or "message" in payload):
        try:
            api_error = ApiError.model_validate(payload)
        except ValidationError:
            logger.warning(f"Malformed error envelope with HTTP {response.status_code}")
        else:
            if api_error.http_status_code is None:
                api_error.http_status_code = response.status_code
            return api_error

    return ApiError(
        http_status_code=response.status_code,
        custom_code="UNEXPECTED_RESPONSE",
        message=response.text or response.reason_phrase,
    )


class HttpTransport:
    """Sends authenticated JSON requests to the gateway.

    The transport holds no per-order state and can be reused across
    sequential calls. Pass ``http_client`` to supply a preconfigured
    ``httpx.Client`` (proxies, test transports, an in-process app).
    """

    def __init__(
        self,
        service_key: str,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.Client] = None,
    ):
        self._service_key = service_key
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=timeout)

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": self._service_key,
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }

    def send(
        self,
        method: str,
        url: str,
        body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Tuple[int, Any]:
        """Issue a single request and return ``(status_code, json_body)``.

        ``json_body`` is None for empty responses.

        Raises:
            WorldpayNetworkError: On connection, timeout or protocol failures.
            WorldpayApiError: (or a subclass) for any non-2xx status.
        """
        if body is not None:
            logger.debug(f"{method} {url} body={sanitize_body(body)}")

        try:
            response = self._client.request(
                method, url, json=body, params=params, headers=self._headers()
            )
        except httpx.HTTPError as e:
            logger.error(f"{method} {url} failed: {type(e).__name__}")
            raise WorldpayNetworkError(f"Failed to reach Worldpay API: {e}") from e

        logger.debug(f"{method} {url} -> {response.status_code}")

        if not response.is_success:
            api_error = api_error_from_response(response)
            logger.warning(
                f"{method} {url} rejected with {api_error.http_status_code} "
                f"({api_error.custom_code}): {api_error.message}"
            )
            raise error_from_api_error(api_error)

        if not response.content:
            return response.status_code, None
        try:
            return response.status_code, response.json()
        except ValueError:
            raise error_from_api_error(ApiError(
                http_status_code=response.status_code,
                custom_code="INVALID_RESPONSE",
                message="Response body is not valid JSON",
            ))

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
