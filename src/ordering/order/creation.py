"""Order creation: turns a paid purchase intent into an order.

The intent is the source of truth for who owns the order. A caller-supplied
user id that disagrees with the intent is logged and ignored.
"""

from datetime import UTC, datetime

import structlog

from ordering.checkout.store import PurchaseIntentStore
from ordering.errors import PurchaseIntentNotFoundError
from ordering.order.order import OrderStatus, PaymentStatus
from ordering.order.store import OrderItem, OrderRecord, OrderStore
from shared.ids import IdGenerator
from shared.result import Err, Ok, Result

logger = structlog.get_logger(__name__)


class CreateOrder:
    def __init__(
        self,
        intents: PurchaseIntentStore,
        orders: OrderStore,
        ids: IdGenerator,
        default_status: str = OrderStatus.PENDING.value,
        default_payment_status: str = PaymentStatus.PENDING.value,
    ) -> None:
        self._intents = intents
        self._orders = orders
        self._ids = ids
        self._default_status = default_status
        self._default_payment_status = default_payment_status

    def create_order(self, purchase_intent_id: str, user_id: str) -> Result[None, PurchaseIntentNotFoundError]:
        """Persist a new order copied from the purchase intent.

        ``OrderAlreadyExistsError`` from the store is not caught here; the
        caller decides whether a duplicate is an error.
        """
        intent = self._intents.load_by_id(purchase_intent_id)
        if intent is None:
            logger.warning("Order requested for unknown purchase intent", purchase_intent_id=purchase_intent_id)
            return Err(PurchaseIntentNotFoundError(purchase_intent_id))

        if str(user_id) != intent.user_id:
            logger.warning(
                "User mismatch on order creation",
                purchase_intent_id=purchase_intent_id,
                intent_user_id=intent.user_id,
                event_user_id=user_id,
            )

        now = datetime.now(UTC)
        order_id = self._ids.new_id()
        self._orders.add(
            OrderRecord(
                id=order_id,
                user_id=intent.user_id,
                purchase_intent_id=intent.id,
                order_code=intent.order_code,
                products=tuple(
                    OrderItem(id=item.id, name=item.name, amount=item.amount, quantity=item.quantity)
                    for item in intent.products
                ),
                status=self._default_status,
                payment_status=self._default_payment_status,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info(
            "Order created",
            order_id=order_id,
            order_code=intent.order_code,
            purchase_intent_id=intent.id,
            user_id=intent.user_id,
        )
        return Ok(None)
