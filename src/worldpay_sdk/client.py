"""Entry point wiring the transport to the resource services."""

import logging
from typing import Optional

import httpx

from .config import WorldpayConfig
from .services import OrderService, TokenService, TransferService
from .transport import HttpTransport

logger = logging.getLogger(__name__)


class WorldpayRestClient:
    """Facade over the order, token and transfer services.

    Example::

        client = WorldpayRestClient(WorldpayConfig.from_env())
        order = client.order_service.create(order_request)
    """

    def __init__(self, config: WorldpayConfig, http_client: Optional[httpx.Client] = None):
        self.config = config
        self.transport = HttpTransport(
            service_key=config.service_key,
            timeout=config.timeout,
            http_client=http_client,
        )
        self.order_service = OrderService(self.transport, config.api_url)
        self.token_service = TokenService(self.transport, config.api_url, config.resolved_token_url)
        self.transfer_service = TransferService(self.transport, config.api_url)
        logger.debug(f"WorldpayRestClient initialized for {config.api_url}")

    @classmethod
    def from_service_key(cls, service_key: str, **kwargs) -> "WorldpayRestClient":
        """Shortcut for ``WorldpayRestClient(WorldpayConfig(service_key=...))``."""
        http_client = kwargs.pop("http_client", None)
        return cls(WorldpayConfig(service_key=service_key, **kwargs), http_client=http_client)

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> "WorldpayRestClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
