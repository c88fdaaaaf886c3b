"""Stripe payment gateway adapter.

Opens Stripe Checkout sessions with the stripe-python SDK. The purchase intent
id travels as ``client_reference_id`` and in the session metadata so the
asynchronous webhook can be matched back to the intent and the user.
"""

from decimal import ROUND_HALF_UP, Decimal

import stripe
import structlog

from payments.gateway.port import CheckoutSessionRequest, GatewaySession, PaymentGateway

logger = structlog.get_logger(__name__)


def to_minor_units(amount: Decimal) -> int:
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class StripeGateway(PaymentGateway):
    """Production Stripe gateway adapter."""

    def __init__(self, api_key: str, success_url: str, cancel_url: str) -> None:
        self.api_key = api_key
        self.success_url = success_url
        self.cancel_url = cancel_url

    def session_params(self, request: CheckoutSessionRequest) -> dict:
        return {
            "mode": "payment",
            "success_url": self.success_url,
            "cancel_url": self.cancel_url,
            "client_reference_id": request.purchase_intent_id,
            "customer_email": request.user_email,
            "metadata": {
                "purchase_intent_id": request.purchase_intent_id,
                "user_id": request.user_id,
                "order_code": request.order_code,
            },
            "line_items": [
                {
                    "quantity": line.quantity,
                    "price_data": {
                        "currency": request.currency,
                        "unit_amount": to_minor_units(line.amount),
                        "product_data": {"name": line.name, "metadata": {"product_id": line.product_id}},
                    },
                }
                for line in request.lines
            ],
        }

    def create_session(self, request: CheckoutSessionRequest) -> GatewaySession | None:
        try:
            session = stripe.checkout.Session.create(
                api_key=self.api_key,
                idempotency_key=request.purchase_intent_id,
                **self.session_params(request),
            )
        except stripe.APIConnectionError:
            raise
        except stripe.StripeError as exc:
            logger.warning(
                "Stripe refused checkout session",
                purchase_intent_id=request.purchase_intent_id,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return None

        url = getattr(session, "url", None)
        if not url:
            logger.warning("Stripe session has no url", purchase_intent_id=request.purchase_intent_id)
            return None
        return GatewaySession(url=url, session_id=getattr(session, "id", None))
