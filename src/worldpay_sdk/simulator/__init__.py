"""In-process gateway simulator for tests and local development."""

from .api import DEFAULT_SERVICE_KEY, create_app
from .gateway import GatewayError, GatewayState

__all__ = [
    "DEFAULT_SERVICE_KEY",
    "GatewayError",
    "GatewayState",
    "create_app",
]
