"""Resource services, one per remote resource."""

from .base import ResourceService
from .orders import OrderService
from .tokens import TokenService
from .transfers import TransferService

__all__ = [
    "ResourceService",
    "OrderService",
    "TokenService",
    "TransferService",
]
