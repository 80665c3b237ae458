"""Service key verification for the simulator API."""

import logging
import secrets
from typing import Optional

from fastapi import Request, Security
from fastapi.security import APIKeyHeader

from .gateway import GatewayError

logger = logging.getLogger(__name__)

# The gateway expects the raw service key, without a "Bearer" prefix
service_key_header = APIKeyHeader(name="Authorization", auto_error=False)


async def verify_service_key(
    request: Request,
    service_key: Optional[str] = Security(service_key_header),
) -> str:
    """Verify the service key from the Authorization header.

    Returns:
        The verified service key.

    Raises:
        GatewayError: If the key is missing or does not match.
    """
    expected_key = request.app.state.service_key
    if not service_key:
        raise GatewayError(401, "UNAUTHORIZED", "Missing service key")
    if not secrets.compare_digest(service_key, expected_key):
        logger.warning("Rejected request with invalid service key")
        raise GatewayError(401, "UNAUTHORIZED", "Invalid service key")
    return service_key
