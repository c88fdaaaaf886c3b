"""Order aggregate: the durable record of a paid purchase intent.

An order is placed once per purchase intent (``purchase_intent_id`` is
unique in storage, and so is the ``order_code`` derived from it). Its
product lines and order code are copied from the intent and never change;
afterwards only ``status``, ``payment_status`` and ``updated_at`` move, and
only through partial updates.
"""

from enum import Enum

from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from ordering.domain import ordering
from ordering.order.events import OrderPlaced, OrderUpdated


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderLine:
    """A product line copied from the purchase intent at payment time."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    amount = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    user_id = Identifier(required=True)
    purchase_intent_id = Identifier(required=True, unique=True)
    order_code = String(required=True, max_length=20, unique=True)
    lines = HasMany(OrderLine)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def place(
        cls,
        order_id,
        purchase_intent_id,
        user_id,
        order_code,
        lines,
        status,
        payment_status,
        placed_at,
    ):
        """Create an order from a purchase intent snapshot.

        Args:
            lines: List of dicts with product_id, name, amount, quantity.
        """
        order = cls(
            id=order_id,
            purchase_intent_id=purchase_intent_id,
            user_id=user_id,
            order_code=order_code,
            status=status,
            payment_status=payment_status,
            created_at=placed_at,
            updated_at=placed_at,
        )
        for line in lines:
            order.add_lines(OrderLine(**line))

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                purchase_intent_id=str(purchase_intent_id),
                user_id=str(user_id),
                order_code=order_code,
                total=round(sum(line["amount"] * line["quantity"] for line in lines), 2),
                placed_at=placed_at,
            )
        )
        return order

    def apply_update(self, updated_at, status=None, payment_status=None):
        """Apply a partial update: fields left as ``None`` keep their value."""
        if status is not None:
            self.status = status
        if payment_status is not None:
            self.payment_status = payment_status
        self.updated_at = updated_at

        self.raise_(
            OrderUpdated(
                order_id=str(self.id),
                status=status,
                payment_status=payment_status,
                updated_at=updated_at,
            )
        )


@ordering.repository(part_of=Order)
class OrderRepository:
    def find_by_purchase_intent(self, purchase_intent_id) -> Order | None:
        results = self._dao.query.filter(purchase_intent_id=str(purchase_intent_id)).all().items
        return results[0] if results else None
