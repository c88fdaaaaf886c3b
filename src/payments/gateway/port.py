"""Payment gateway port (abstract interface).

Defines the contract that all payment gateway adapters must implement.
This enables swapping between FakeGateway (dev/test) and StripeGateway
(production) without changing any use case.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class CheckoutLine:
    product_id: str
    name: str
    amount: Decimal
    quantity: int


@dataclass(frozen=True)
class CheckoutSessionRequest:
    """Everything the gateway needs to open a hosted payment page."""

    purchase_intent_id: str
    order_code: str
    user_id: str
    user_email: str
    lines: tuple[CheckoutLine, ...]
    total: Decimal
    currency: str = "usd"


@dataclass(frozen=True)
class GatewaySession:
    """A payment session opened by the gateway."""

    url: str
    session_id: str | None = None


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_session(self, request: CheckoutSessionRequest) -> GatewaySession | None:
        """Open a hosted checkout session, or return ``None`` if the gateway refused."""
        ...
