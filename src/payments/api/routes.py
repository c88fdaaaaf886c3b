"""FastAPI routes for the Payments domain: gateway callbacks.

Reconciliation makes blocking store calls, so the routes are plain ``def``
and run in the threadpool. Only reading the raw body is awaited, in a
dependency, because the signature covers the exact bytes received.
"""

from fastapi import APIRouter, Depends, Header, HTTPException, Request

from payments.api.schemas import ConfigureGatewayRequest, GatewayConfigResponse, StatusResponse
from payments.gateway.fake_adapter import FakeGateway
from storefront.dependencies import get_container
from storefront.http import unwrap

payment_router = APIRouter(prefix="/payments", tags=["payments"])


async def raw_body(request: Request) -> bytes:
    return await request.body()


@payment_router.post("/webhook", response_model=StatusResponse)
def process_webhook(
    payload: bytes = Depends(raw_body),
    stripe_signature: str = Header(default="", alias="Stripe-Signature"),
    container=Depends(get_container),
) -> StatusResponse:
    """Reconcile a payment gateway callback with its purchase intent."""
    unwrap(container.reconciliation.handle_event(stripe_signature, payload))
    return StatusResponse(status="processed")


@payment_router.post("/gateway/configure", response_model=GatewayConfigResponse)
def configure_gateway(body: ConfigureGatewayRequest, container=Depends(get_container)) -> GatewayConfigResponse:
    """Configure the FakeGateway behavior (non-production only).

    Lets manual API testing make the next checkouts succeed or fail.
    """
    if container.settings.is_production:
        raise HTTPException(status_code=403, detail="Gateway configuration not available in production")

    gateway = container.gateway
    if not isinstance(gateway, FakeGateway):
        raise HTTPException(status_code=400, detail="Gateway configuration only available for FakeGateway")

    gateway.configure(should_succeed=body.should_succeed)
    return GatewayConfigResponse(gateway=type(gateway).__name__, should_succeed=gateway.should_succeed)
