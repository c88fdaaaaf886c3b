"""Domain events for the ShoppingCart aggregate."""

from protean.fields import Identifier, Integer

from ordering.domain import ordering


@ordering.event(part_of="ShoppingCart")
class CartOpened:
    """A user's first product created their shopping cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)


@ordering.event(part_of="ShoppingCart")
class CartItemAdded:
    """A product not yet in the cart was appended to it."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@ordering.event(part_of="ShoppingCart")
class CartQuantityUpdated:
    """The quantity of a product already in the cart was changed."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
