"""Order lookup for customers and administrators."""

import structlog

from ordering.errors import OrderNotFoundError
from ordering.order.store import OrderRecord, OrderStore
from shared.result import Err, Ok, Result

logger = structlog.get_logger(__name__)


class LoadOrder:
    def __init__(self, orders: OrderStore) -> None:
        self._orders = orders

    def load_order(self, order_id: str, owner_id: str | None = None) -> Result[OrderRecord, OrderNotFoundError]:
        """Load an order, optionally restricted to the given owner.

        Another user's order is reported as not found.
        """
        order = self._orders.load_by_id(order_id)
        if order is None:
            return Err(OrderNotFoundError(order_id))
        if owner_id is not None and order.user_id != str(owner_id):
            logger.info("Order lookup by non-owner", order_id=order_id, user_id=owner_id)
            return Err(OrderNotFoundError(order_id))
        return Ok(order)
