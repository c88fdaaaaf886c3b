"""Configurable fake payment gateway for development and testing.

This adapter simulates a real payment gateway without any external calls.
It can be configured at runtime to succeed or fail, making it useful for:
- Manual API testing via /payments/gateway/configure
- Automated tests with predictable outcomes
- Development without real gateway credentials
"""

from uuid import uuid4

from payments.gateway.port import CheckoutSessionRequest, GatewaySession, PaymentGateway


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self, base_url: str = "https://checkout.fake-gateway.test/pay") -> None:
        self.base_url = base_url
        self.should_succeed: bool = True
        self.calls: list[CheckoutSessionRequest] = []

    def configure(self, should_succeed: bool) -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed

    def create_session(self, request: CheckoutSessionRequest) -> GatewaySession | None:
        self.calls.append(request)

        if not self.should_succeed:
            return None

        session_id = f"cs_fake_{uuid4().hex[:12]}"
        return GatewaySession(url=f"{self.base_url}/{session_id}", session_id=session_id)
