"""Payment event reconciliation: the webhook side of checkout.

Each delivery walks a small state machine:

    RECEIVED -> VERIFIED -> SUCCESS | FAILURE -> PROCESSED
        \\            \\
         +------------+--> REJECTED

A success places the order for the purchase intent, marks it paid and
completes the intent. Deliveries are at-least-once, so every success picks
up from whichever of those steps is still missing: a redelivery after a
partial failure finishes the job, and one after a full run writes nothing.
A concurrent duplicate that loses the race at the order store is
acknowledged and leaves the rest to the winner.

A failure releases the intent so the user can check out again. It never
touches an order that already exists.

Deliveries for the same intent are serialized within the process. Across
processes the unique purchase intent id on orders holds the line.
"""

from enum import Enum

import structlog

from identity.customer.directory import UserDirectory
from identity.errors import UserNotFoundError
from ordering.checkout.purchase_intent import PurchaseIntentStatus
from ordering.checkout.store import PurchaseIntentStore
from ordering.errors import OrderAlreadyExistsError, PurchaseIntentNotFoundError
from ordering.order.creation import CreateOrder
from ordering.order.order import PaymentStatus
from ordering.order.store import OrderStore
from ordering.order.update import UpdateOrder
from payments.errors import EventNotProcessError, GatewayIncompatibilityError
from payments.webhook.parser import (
    GatewayEvent,
    IncompatiblePayloadError,
    PaymentEventParser,
    TransactionEventType,
)
from payments.webhook.signature import SignatureVerifier
from shared.locks import KeyedLock
from shared.result import Err, Ok, Result

logger = structlog.get_logger(__name__)


class ReconciliationState(Enum):
    RECEIVED = "received"
    VERIFIED = "verified"
    SUCCESS = "success"
    FAILURE = "failure"
    PROCESSED = "processed"
    REJECTED = "rejected"


class PaymentEventReconciliation:
    def __init__(
        self,
        verifier: SignatureVerifier,
        parser: PaymentEventParser,
        users: UserDirectory,
        intents: PurchaseIntentStore,
        orders: OrderStore,
        create_order: CreateOrder,
        update_order: UpdateOrder,
        locks: KeyedLock | None = None,
    ) -> None:
        self._verifier = verifier
        self._parser = parser
        self._users = users
        self._intents = intents
        self._orders = orders
        self._create_order = create_order
        self._update_order = update_order
        self._locks = locks or KeyedLock()

    def handle_event(
        self, signature: str, payload: str | bytes
    ) -> Result[
        None,
        GatewayIncompatibilityError | EventNotProcessError | UserNotFoundError | PurchaseIntentNotFoundError,
    ]:
        log = logger.bind(state=ReconciliationState.RECEIVED.value)

        if not self._verifier.verify(signature, payload):
            log.warning("Webhook rejected", state=ReconciliationState.REJECTED.value, reason="bad_signature")
            return Err(GatewayIncompatibilityError("Invalid webhook signature"))

        try:
            event = self._parser.parse(payload)
        except IncompatiblePayloadError as exc:
            log.warning(
                "Webhook rejected", state=ReconciliationState.REJECTED.value, reason="bad_shape", detail=str(exc)
            )
            return Err(GatewayIncompatibilityError("Unrecognized webhook payload"))

        log = log.bind(state=ReconciliationState.VERIFIED.value, event_id=event.event_id, event=event.raw_type)
        log.info("Webhook verified")

        if event.event_type is None:
            log.info("Webhook not processable", reason="unmapped_event_type")
            return Err(EventNotProcessError(f"Unhandled event type: {event.raw_type}"))

        if not event.purchase_intent_id or not event.user_id:
            log.warning("Webhook not processable", reason="missing_identifiers")
            return Err(EventNotProcessError("Event does not name a purchase intent and user"))

        if self._users.load_by_id(event.user_id) is None:
            log.warning("Webhook names unknown user", user_id=event.user_id)
            return Err(UserNotFoundError(event.user_id))

        with self._locks.hold(event.purchase_intent_id):
            if event.event_type is TransactionEventType.PAYMENT_SUCCESS:
                return self._on_success(event, log.bind(state=ReconciliationState.SUCCESS.value))
            return self._on_failure(event, log.bind(state=ReconciliationState.FAILURE.value))

    def _on_success(self, event: GatewayEvent, log) -> Result[None, PurchaseIntentNotFoundError]:
        pi = event.purchase_intent_id

        order = self._orders.load_by_purchase_intent_id(pi)
        if order is None:
            try:
                created = self._create_order.create_order(pi, event.user_id)
            except OrderAlreadyExistsError:
                log.info("Concurrent payment success ignored", purchase_intent_id=pi)
                return Ok(None)
            if created.is_err():
                log.warning("Webhook names unknown purchase intent", purchase_intent_id=pi)
                return created
            order = self._orders.load_by_purchase_intent_id(pi)
        else:
            log.info("Order already placed for intent", purchase_intent_id=pi, order_id=order.id)

        if order.payment_status != PaymentStatus.PAID.value:
            self._update_order.update_order(order.id, payment_status=PaymentStatus.PAID.value)

        intent = self._intents.load_by_id(pi)
        if intent is not None and intent.status != PurchaseIntentStatus.COMPLETED.value:
            self._intents.mark_completed(pi)

        log.info(
            "Payment reconciled",
            state=ReconciliationState.PROCESSED.value,
            purchase_intent_id=pi,
            order_id=order.id,
            order_code=order.order_code,
        )
        return Ok(None)

    def _on_failure(self, event: GatewayEvent, log) -> Result[None, PurchaseIntentNotFoundError]:
        pi = event.purchase_intent_id

        if self._orders.load_by_purchase_intent_id(pi) is not None:
            log.info("Payment failure after order placed ignored", purchase_intent_id=pi)
            return Ok(None)

        intent = self._intents.load_by_id(pi)
        if intent is None:
            log.warning("Webhook names unknown purchase intent", purchase_intent_id=pi)
            return Err(PurchaseIntentNotFoundError(pi))

        if intent.status == PurchaseIntentStatus.COMPLETED.value:
            log.info("Payment failure for completed intent ignored", purchase_intent_id=pi)
            return Ok(None)

        self._intents.mark_released(pi)
        log.info("Purchase intent released", state=ReconciliationState.PROCESSED.value, purchase_intent_id=pi)
        return Ok(None)
