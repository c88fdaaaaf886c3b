"""Partial order updates for status and payment status."""

from datetime import UTC, datetime

import structlog

from ordering.errors import OrderNotFoundError
from ordering.order.store import OrderDelta, OrderStore
from shared.result import Err, Ok, Result

logger = structlog.get_logger(__name__)


class UpdateOrder:
    def __init__(self, orders: OrderStore) -> None:
        self._orders = orders

    def update_order(
        self,
        order_id: str,
        status: str | None = None,
        payment_status: str | None = None,
        updated_at: datetime | None = None,
    ) -> Result[None, OrderNotFoundError]:
        if self._orders.load_by_id(order_id) is None:
            return Err(OrderNotFoundError(order_id))

        delta = OrderDelta(
            updated_at=updated_at or datetime.now(UTC),
            status=status,
            payment_status=payment_status,
        )
        self._orders.update_by_id(order_id, delta)
        logger.info("Order updated", order_id=order_id, status=status, payment_status=payment_status)
        return Ok(None)
