"""Webhook signature verification.

The gateway signs each delivery with a shared secret and sends the result in
the ``Stripe-Signature`` header. Checking the header, including the age of its
timestamp, is delegated to the stripe-python SDK.
"""

from abc import ABC, abstractmethod

import stripe
import structlog

logger = structlog.get_logger(__name__)


class SignatureVerifier(ABC):
    @abstractmethod
    def verify(self, signature: str, payload: str | bytes) -> bool: ...


class StripeSignatureVerifier(SignatureVerifier):
    """Verifies ``t=<timestamp>,v1=<digest>`` headers against the endpoint secret.

    A ``tolerance`` of 0 disables the timestamp age check.
    """

    def __init__(self, secret: str, tolerance: int = 300) -> None:
        self._secret = secret
        self._tolerance = tolerance

    def verify(self, signature: str, payload: str | bytes) -> bool:
        if not signature:
            logger.warning("Missing webhook signature header")
            return False
        try:
            stripe.WebhookSignature.verify_header(payload, signature, self._secret, self._tolerance or None)
        except stripe.SignatureVerificationError as exc:
            logger.warning("Webhook signature rejected", reason=str(exc))
            return False
        return True
