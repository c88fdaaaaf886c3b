"""Parsing of raw gateway webhook bodies into typed events.

Only Checkout Session events are mapped to a transaction outcome:

    checkout.session.completed (payment_status == "paid")  -> PaymentSuccess
    checkout.session.async_payment_succeeded               -> PaymentSuccess
    checkout.session.async_payment_failed                  -> PaymentFailure
    checkout.session.expired                               -> PaymentFailure

Every other well-formed event parses with ``event_type=None`` and is left to
the caller to reject. Bodies that are not JSON, or do not carry the common
event envelope, raise ``IncompatiblePayloadError``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class TransactionEventType(Enum):
    PAYMENT_SUCCESS = "PaymentSuccess"
    PAYMENT_FAILURE = "PaymentFailure"


class IncompatiblePayloadError(Exception):
    """Payload does not match any known gateway event shape."""


@dataclass(frozen=True)
class GatewayEvent:
    event_id: str
    raw_type: str
    event_type: TransactionEventType | None
    purchase_intent_id: str | None
    user_id: str | None
    session_id: str | None


class PaymentEventParser(ABC):
    @abstractmethod
    def parse(self, payload: str | bytes) -> GatewayEvent: ...


# ---------------------------------------------------------------------------
# Wire models
# ---------------------------------------------------------------------------
class SessionMetadata(BaseModel):
    model_config = ConfigDict(extra="ignore")

    purchase_intent_id: str | None = None
    user_id: str | None = None
    order_code: str | None = None


class SessionObject(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    client_reference_id: str | None = None
    payment_status: str | None = None
    metadata: SessionMetadata = Field(default_factory=SessionMetadata)


class EventData(BaseModel):
    object: SessionObject


class StripeEvent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    type: str
    created: int | None = None
    data: EventData


class StripeEventParser(PaymentEventParser):
    def parse(self, payload: str | bytes) -> GatewayEvent:
        try:
            event = StripeEvent.model_validate_json(payload)
        except ValidationError as exc:
            raise IncompatiblePayloadError(str(exc)) from exc

        session = event.data.object
        return GatewayEvent(
            event_id=event.id,
            raw_type=event.type,
            event_type=self._classify(event.type, session),
            purchase_intent_id=session.metadata.purchase_intent_id or session.client_reference_id,
            user_id=session.metadata.user_id,
            session_id=session.id,
        )

    @staticmethod
    def _classify(event_type: str, session: SessionObject) -> TransactionEventType | None:
        if event_type == "checkout.session.completed":
            if session.payment_status == "paid":
                return TransactionEventType.PAYMENT_SUCCESS
            # Delayed payment methods settle later through async_payment_*
            return None
        if event_type == "checkout.session.async_payment_succeeded":
            return TransactionEventType.PAYMENT_SUCCESS
        if event_type in ("checkout.session.async_payment_failed", "checkout.session.expired"):
            return TransactionEventType.PAYMENT_FAILURE
        return None
