"""Client configuration sourced from arguments or the environment."""

import os
from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_API_URL = "https://api.worldpay.com/v1"
DEFAULT_TIMEOUT = 65.0


class WorldpayConfig(BaseModel):
    """Credentials and endpoints used by ``WorldpayRestClient``."""
    service_key: str = Field(..., min_length=1, description="Merchant service key, sent on every call")
    client_key: Optional[str] = Field(None, description="Client key used to create tokens")
    merchant_id: Optional[str] = Field(None, description="Merchant id used by search operations")
    api_url: str = Field(default=DEFAULT_API_URL)
    token_url: Optional[str] = Field(None, description="Token endpoint; defaults to {api_url}/tokens")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Connect/read timeout in seconds")

    @property
    def resolved_token_url(self) -> str:
        return self.token_url or f"{self.api_url.rstrip('/')}/tokens"

    @classmethod
    def from_env(cls, service_key: Optional[str] = None) -> "WorldpayConfig":
        """Build a config from ``WORLDPAY_*`` environment variables.

        Args:
            service_key: Overrides WORLDPAY_SERVICE_KEY when given.

        Raises:
            ValueError: If no service key is provided or found, or
                WORLDPAY_TIMEOUT is not a number.
        """
        key = service_key or os.getenv("WORLDPAY_SERVICE_KEY")
        if not key:
            raise ValueError(
                "WORLDPAY_SERVICE_KEY must be provided either as argument or environment variable"
            )
        raw_timeout = os.getenv("WORLDPAY_TIMEOUT")
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        except ValueError as e:
            raise ValueError(
                f"WORLDPAY_TIMEOUT must be a number of seconds, got {raw_timeout!r}"
            ) from e
        return cls(
            service_key=key,
            client_key=os.getenv("WORLDPAY_CLIENT_KEY") or None,
            merchant_id=os.getenv("WORLDPAY_MERCHANT_ID") or None,
            api_url=os.getenv("WORLDPAY_API_URL", DEFAULT_API_URL),
            token_url=os.getenv("WORLDPAY_TOKEN_URL") or None,
            timeout=timeout,
        )
