"""Payment gateway factory.

Provides build_gateway() to pick an implementation from settings:
- FakeGateway for development and testing
- StripeGateway for production
"""

from payments.gateway.fake_adapter import FakeGateway
from payments.gateway.port import PaymentGateway
from payments.gateway.stripe_adapter import StripeGateway


def build_gateway(settings) -> PaymentGateway:
    """Return the gateway named by ``settings.gateway`` (``fake`` or ``stripe``)."""
    if settings.gateway == "stripe":
        if not settings.stripe_api_key:
            raise ValueError("STOREFRONT_STRIPE_API_KEY must be set to use the Stripe gateway")
        return StripeGateway(
            api_key=settings.stripe_api_key,
            success_url=settings.checkout_success_url,
            cancel_url=settings.checkout_cancel_url,
        )
    if settings.gateway == "fake":
        return FakeGateway()
    raise ValueError(f"Unknown payment gateway: {settings.gateway}")
