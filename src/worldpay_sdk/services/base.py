"""Shared request path for the resource services."""

import logging
from typing import Any, Dict, Optional, Type, TypeVar
from urllib.parse import quote

from pydantic import ValidationError

from ..errors import WorldpayValidationError, error_from_api_error
from ..models.common import ApiError, WorldpayModel
from ..transport import HttpTransport

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT", bound=WorldpayModel)


class ResourceService:
    """
    Maps one remote resource to a handful of operations. Implementations are
    stateless: every call builds a URI, sends one request and deserializes
    the response (or raises the mapped error).
    """

    resource: str = ""

    def __init__(self, transport: HttpTransport, api_url: str):
        self._transport = transport
        self._api_url = api_url.rstrip("/")

    def _url(self, *segments: str) -> str:
        path = "/".join(quote(segment, safe="") for segment in segments)
        return f"{self._api_url}/{self.resource}" + (f"/{path}" if path else "")

    @staticmethod
    def _require_id(value: Optional[str], field: str) -> str:
        if not value or not value.strip():
            raise WorldpayValidationError(f"{field} must be a non-empty string", field=field)
        return value

    def _request(
        self,
        method: str,
        url: str,
        body: Optional[WorldpayModel] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        payload = body.to_wire() if body is not None else None
        _, data = self._transport.send(method, url, body=payload, params=params)
        return data

    def _parse(self, model: Type[ResponseT], data: Any) -> ResponseT:
        """Deserialize a 2xx body; never returns a partially populated model."""
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error(f"Unexpected {model.__name__} payload: {e.error_count()} validation errors")
            raise error_from_api_error(ApiError(
                custom_code="INVALID_RESPONSE",
                message=f"Response could not be parsed as {model.__name__}",
            )) from e
