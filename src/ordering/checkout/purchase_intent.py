"""PurchaseIntent aggregate: the priced snapshot of a cart at checkout time.

The product lines are copied from the catalogue when the intent is created
and never change afterwards, so a price change after checkout cannot alter
what the user is charged or what the order records. Only ``status`` moves:

    OPEN -> COMPLETED   (payment succeeded, order placed)
    OPEN -> RELEASED    (payment failed or no gateway session)
    RELEASED -> COMPLETED (a late success still wins: the money was taken)
"""

import re
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from ordering.checkout.events import (
    PurchaseIntentCompleted,
    PurchaseIntentCreated,
    PurchaseIntentReleased,
)
from ordering.domain import ordering


class PurchaseIntentStatus(Enum):
    OPEN = "Open"
    COMPLETED = "Completed"
    RELEASED = "Released"


def order_code_for(purchase_intent_id) -> str:
    """Derive the customer-facing order code from a purchase intent id."""
    return "ORD-" + re.sub(r"[^A-Z0-9]", "", str(purchase_intent_id).upper())[:12]


@ordering.entity(part_of="PurchaseIntent")
class PurchaseLine:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    amount = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)


@ordering.aggregate
class PurchaseIntent:
    user_id = Identifier(required=True)
    order_code = String(required=True, max_length=20)
    status = String(choices=PurchaseIntentStatus, default=PurchaseIntentStatus.OPEN.value)
    lines = HasMany(PurchaseLine)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def freeze(cls, purchase_intent_id, user_id, lines, created_at=None):
        """Create an open intent from priced lines.

        Args:
            lines: List of dicts with product_id, name, amount, quantity.
        """
        if not lines:
            raise ValidationError({"lines": ["A purchase intent needs at least one line"]})

        now = created_at or datetime.now(UTC)
        intent = cls(
            id=purchase_intent_id,
            user_id=user_id,
            order_code=order_code_for(purchase_intent_id),
            status=PurchaseIntentStatus.OPEN.value,
            created_at=now,
            updated_at=now,
        )
        for line in lines:
            intent.add_lines(PurchaseLine(**line))

        intent.raise_(
            PurchaseIntentCreated(
                purchase_intent_id=str(intent.id),
                user_id=str(user_id),
                order_code=intent.order_code,
                total=round(sum(line["amount"] * line["quantity"] for line in lines), 2),
                created_at=now,
            )
        )
        return intent

    def complete(self):
        if self.status == PurchaseIntentStatus.COMPLETED.value:
            return

        now = datetime.now(UTC)
        self.status = PurchaseIntentStatus.COMPLETED.value
        self.updated_at = now
        self.raise_(PurchaseIntentCompleted(purchase_intent_id=str(self.id), completed_at=now))

    def release(self):
        if self.status == PurchaseIntentStatus.RELEASED.value:
            return
        if self.status == PurchaseIntentStatus.COMPLETED.value:
            raise ValidationError({"status": ["A completed purchase intent cannot be released"]})

        now = datetime.now(UTC)
        self.status = PurchaseIntentStatus.RELEASED.value
        self.updated_at = now
        self.raise_(PurchaseIntentReleased(purchase_intent_id=str(self.id), released_at=now))
