"""FastAPI app reproducing the gateway's REST surface in process.

Mounted under ``/v1`` so the client's default base URL path lines up::

    app = create_app(service_key="T_S_test")
    http_client = TestClient(app, base_url="https://api.worldpay.com")
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..models.common import ApiError
from ..models.requests import (
    CaptureOrderRequest,
    OrderAuthorizationRequest,
    OrderRequest,
    RefundOrderRequest,
    TokenRequest,
    UpdateTokenRequest,
)
from .auth import verify_service_key
from .gateway import GatewayError, GatewayState

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_KEY = "T_S_simulator"


def get_state(request: Request) -> GatewayState:
    return request.app.state.gateway


# Token creation is authenticated by the client key in the body
public_router = APIRouter()
router = APIRouter(dependencies=[Depends(verify_service_key)])


@public_router.post("/tokens")
def create_token(body: TokenRequest, state: GatewayState = Depends(get_state)):
    return JSONResponse(content=state.create_token(body).to_wire())


@router.get("/tokens/{token}")
def get_token(token: str, state: GatewayState = Depends(get_state)):
    return JSONResponse(content=state.get_token(token).to_wire())


@router.put("/tokens/{token}")
def update_token(token: str, body: UpdateTokenRequest, state: GatewayState = Depends(get_state)):
    state.update_token(token, body)
    return Response(status_code=200)


@router.delete("/tokens/{token}")
def delete_token(token: str, state: GatewayState = Depends(get_state)):
    state.delete_token(token)
    return Response(status_code=200)


@router.post("/orders")
def create_order(body: OrderRequest, state: GatewayState = Depends(get_state)):
    return JSONResponse(content=state.create_order(body).to_wire())


@router.get("/orders")
def search_orders(
    merchant_id: str = Query(..., alias="merchantId"),
    page_number: int = Query(1, alias="pageNumber"),
    state: GatewayState = Depends(get_state),
):
    return JSONResponse(content=state.search_orders(merchant_id, page_number).to_wire())


@router.get("/orders/{order_code}")
def find_order(order_code: str, state: GatewayState = Depends(get_state)):
    return JSONResponse(content=state.find_order(order_code).to_wire())


@router.put("/orders/{order_code}")
def authorize_3ds(
    order_code: str,
    body: OrderAuthorizationRequest,
    state: GatewayState = Depends(get_state),
):
    return JSONResponse(content=state.authorize_3ds(order_code, body).to_wire())


@router.post("/orders/{order_code}/capture")
def capture_order(
    order_code: str,
    body: Optional[CaptureOrderRequest] = None,
    state: GatewayState = Depends(get_state),
):
    request = body or CaptureOrderRequest()
    return JSONResponse(content=state.capture(order_code, request).to_wire())


@router.post("/orders/{order_code}/refund")
def refund_order(
    order_code: str,
    body: Optional[RefundOrderRequest] = None,
    state: GatewayState = Depends(get_state),
):
    state.refund(order_code, body.refund_amount if body else None)
    return Response(status_code=200)


@router.delete("/orders/{order_code}")
def cancel_order(order_code: str, state: GatewayState = Depends(get_state)):
    state.cancel(order_code)
    return Response(status_code=200)


@router.get("/transfers")
def search_transfers(
    merchant_id: str = Query(..., alias="merchantId"),
    page_number: int = Query(1, alias="pageNumber"),
    state: GatewayState = Depends(get_state),
):
    return JSONResponse(content=state.search_transfers(merchant_id, page_number).to_wire())


@router.get("/transfers/{transfer_id}")
def get_transfer(transfer_id: str, state: GatewayState = Depends(get_state)):
    return JSONResponse(content=state.get_transfer(transfer_id).to_wire())


async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.api_error.to_wire())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()))
    api_error = ApiError(
        http_status_code=400,
        custom_code="BAD_REQUEST",
        message=f"Invalid request: {location} {first.get('msg', '')}".strip(),
        description=str(exc.errors()),
    )
    return JSONResponse(status_code=400, content=api_error.to_wire())


def create_app(
    state: Optional[GatewayState] = None,
    service_key: str = DEFAULT_SERVICE_KEY,
) -> FastAPI:
    """Build a simulator app around ``state`` (a fresh one when omitted)."""
    app = FastAPI(title="Worldpay gateway simulator")
    app.state.gateway = state or GatewayState()
    app.state.service_key = service_key
    app.include_router(public_router, prefix="/v1")
    app.include_router(router, prefix="/v1")
    app.add_exception_handler(GatewayError, gateway_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    logger.info("Gateway simulator app created")
    return app
