"""Domain events for the PurchaseIntent aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from ordering.domain import ordering


@ordering.event(part_of="PurchaseIntent")
class PurchaseIntentCreated:
    """A cart was frozen into a priced purchase intent at checkout."""

    __version__ = 1

    purchase_intent_id = Identifier(required=True)
    user_id = Identifier(required=True)
    order_code = String(required=True)
    total = Float(required=True)
    created_at = DateTime(required=True)


@ordering.event(part_of="PurchaseIntent")
class PurchaseIntentCompleted:
    """The gateway confirmed payment and an order was placed for the intent."""

    __version__ = 1

    purchase_intent_id = Identifier(required=True)
    completed_at = DateTime(required=True)


@ordering.event(part_of="PurchaseIntent")
class PurchaseIntentReleased:
    """Payment failed or no session was opened; the user may check out again."""

    __version__ = 1

    purchase_intent_id = Identifier(required=True)
    released_at = DateTime(required=True)
