"""Shopping Cart aggregate: one active cart per user.

A cart is an ordered list of (product, quantity) lines. Adding a product
that is already present increments its quantity instead of adding a second
line, so no two lines ever share a product id.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer

from ordering.cart.events import CartItemAdded, CartOpened, CartQuantityUpdated
from ordering.domain import ordering


@ordering.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@ordering.aggregate
class ShoppingCart:
    user_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def product_ids_must_be_unique(self):
        product_ids = [str(item.product_id) for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product can appear only once in a cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def open(cls, cart_id, user_id, product_id, quantity):
        """Create a user's cart holding a single product line."""
        now = datetime.now(UTC)
        cart = cls(
            id=cart_id,
            user_id=user_id,
            created_at=now,
            updated_at=now,
        )
        cart.raise_(CartOpened(cart_id=str(cart.id), user_id=str(user_id)))
        cart.append_item(product_id, quantity)
        return cart

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def item_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def append_item(self, product_id, quantity):
        """Add a product that is not in the cart yet."""
        if self.item_for(product_id) is not None:
            raise ValidationError({"product_id": ["Product is already in the cart"]})

        now = datetime.now(UTC)
        self.add_items(
            CartItem(
                product_id=product_id,
                quantity=quantity,
                added_at=now,
            )
        )
        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                product_id=str(product_id),
                quantity=quantity,
            )
        )

    def update_item_quantity(self, product_id, new_quantity):
        """Set the quantity of a product already in the cart."""
        item = self.item_for(product_id)
        if item is None:
            raise ValidationError({"product_id": ["Product is not in the cart"]})

        previous_quantity = item.quantity
        item.quantity = new_quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )


@ordering.repository(part_of=ShoppingCart)
class ShoppingCartRepository:
    def find_by_user(self, user_id) -> ShoppingCart | None:
        results = self._dao.query.filter(user_id=str(user_id)).all().items
        return results[0] if results else None
