"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A paid purchase intent was turned into a durable order."""

    __version__ = 1

    order_id = Identifier(required=True)
    purchase_intent_id = Identifier(required=True)
    user_id = Identifier(required=True)
    order_code = String(required=True)
    total = Float(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderUpdated:
    """The status and/or payment status of an order changed.

    Fields that were not part of the update are left empty.
    """

    __version__ = 1

    order_id = Identifier(required=True)
    status = String()
    payment_status = String()
    updated_at = DateTime(required=True)
