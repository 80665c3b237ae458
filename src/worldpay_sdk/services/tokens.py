"""Token resource: turn card or APM details into a short-lived reference."""

import logging
from typing import Optional

from ..models.requests import TokenRequest, UpdateTokenRequest
from ..models.responses import TokenResponse
from ..transport import HttpTransport
from .base import ResourceService

logger = logging.getLogger(__name__)


class TokenService(ResourceService):
    """Client for ``/tokens``.

    Token creation may live on a different host than the rest of the API,
    so ``token_url`` overrides the derived ``{api_url}/tokens``.
    """

    resource = "tokens"

    def __init__(self, transport: HttpTransport, api_url: str, token_url: Optional[str] = None):
        super().__init__(transport, api_url)
        self._token_url = token_url

    def create(self, token_request: TokenRequest) -> TokenResponse:
        """Tokenize a payment method. Non-reusable tokens are consumed by one order."""
        url = self._token_url or self._url()
        data = self._request("POST", url, body=token_request)
        token = self._parse(TokenResponse, data)
        logger.info(f"Created {'reusable' if token.reusable else 'single-use'} token")
        return token

    def get(self, token: str) -> TokenResponse:
        self._require_id(token, "token")
        return self._parse(TokenResponse, self._request("GET", self._url(token)))

    def update(self, token: str, update_request: UpdateTokenRequest) -> None:
        """Attach a new CVC to a reusable token."""
        self._require_id(token, "token")
        self._request("PUT", self._url(token), body=update_request)

    def delete(self, token: str) -> None:
        self._require_id(token, "token")
        self._request("DELETE", self._url(token))
        logger.info("Deleted token")
