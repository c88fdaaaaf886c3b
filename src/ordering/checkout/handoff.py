"""Checkout handoff: freezes the completed cart and opens a gateway session.

The purchase intent is saved before the gateway is called, so a webhook
naming the intent can still be reconciled if the gateway's response to us
is lost. When the gateway refuses, the just-saved intent is released.
"""

from dataclasses import dataclass
from datetime import UTC, datetime

import structlog

from identity.customer.directory import UserDirectory
from identity.errors import UserNotFoundError
from ordering.cart.completion import LoadCompleteCart
from ordering.checkout.purchase_intent import order_code_for
from ordering.checkout.store import PurchaseIntentRecord, PurchaseIntentStore, PurchaseItem
from ordering.errors import CheckoutFailureError, EmptyCartError, ProductNotAvailableError
from payments.gateway.port import CheckoutLine, CheckoutSessionRequest, PaymentGateway
from shared.ids import IdGenerator
from shared.result import Err, Ok, Result

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CheckoutSession:
    session_url: str


class Checkout:
    def __init__(
        self,
        complete_carts: LoadCompleteCart,
        users: UserDirectory,
        intents: PurchaseIntentStore,
        gateway: PaymentGateway,
        ids: IdGenerator,
        currency: str = "usd",
    ) -> None:
        self._complete_carts = complete_carts
        self._users = users
        self._intents = intents
        self._gateway = gateway
        self._ids = ids
        self._currency = currency

    def checkout(
        self, user_id: str
    ) -> Result[
        CheckoutSession,
        EmptyCartError | ProductNotAvailableError | UserNotFoundError | CheckoutFailureError,
    ]:
        completed = self._complete_carts.load_complete_cart(user_id)
        if completed.is_err():
            return completed
        cart = completed.value

        user = self._users.load_by_id(user_id)
        if user is None:
            return Err(UserNotFoundError(user_id))

        purchase_intent_id = self._ids.new_id()
        now = datetime.now(UTC)
        intent = PurchaseIntentRecord(
            id=purchase_intent_id,
            user_id=str(user_id),
            order_code=order_code_for(purchase_intent_id),
            created_at=now,
            updated_at=now,
            products=tuple(
                PurchaseItem(id=item.product_id, name=item.name, amount=item.amount, quantity=item.quantity)
                for item in cart.items
            ),
        )
        self._intents.save(intent)

        session = self._gateway.create_session(
            CheckoutSessionRequest(
                purchase_intent_id=purchase_intent_id,
                order_code=intent.order_code,
                user_id=str(user_id),
                user_email=user.email,
                lines=tuple(
                    CheckoutLine(
                        product_id=item.product_id,
                        name=item.name,
                        amount=item.amount,
                        quantity=item.quantity,
                    )
                    for item in cart.items
                ),
                total=cart.total,
                currency=self._currency,
            )
        )
        if session is None or not session.url:
            logger.warning("Gateway refused checkout", user_id=user_id, purchase_intent_id=purchase_intent_id)
            self._intents.mark_released(purchase_intent_id)
            return Err(CheckoutFailureError())

        logger.info(
            "Checkout session opened",
            user_id=user_id,
            purchase_intent_id=purchase_intent_id,
            order_code=intent.order_code,
            total=str(cart.total),
        )
        return Ok(CheckoutSession(session_url=session.url))
