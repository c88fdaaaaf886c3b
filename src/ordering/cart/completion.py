"""Cart completion: expands a stored cart into a fully priced snapshot.

Completion is all-or-nothing: if any line refers to a product the catalogue
no longer has, the whole snapshot is refused rather than silently dropping
the line.
"""

from dataclasses import dataclass
from decimal import Decimal

import structlog

from catalogue.product.catalog import Catalog
from ordering.cart.store import CartStore
from ordering.errors import EmptyCartError, ProductNotAvailableError
from shared.result import Err, Ok, Result

logger = structlog.get_logger(__name__)

CENT = Decimal("0.01")


@dataclass(frozen=True)
class CompleteCartItem:
    product_id: str
    name: str
    amount: Decimal
    quantity: int

    @property
    def subtotal(self) -> Decimal:
        return self.amount * self.quantity


@dataclass(frozen=True)
class CompleteCart:
    """Priced view of a cart. Computed on demand and never persisted."""

    id: str
    user_id: str
    items: tuple[CompleteCartItem, ...]

    @property
    def total(self) -> Decimal:
        return sum((item.subtotal for item in self.items), Decimal("0")).quantize(CENT)


class LoadCompleteCart:
    def __init__(self, carts: CartStore, catalog: Catalog) -> None:
        self._carts = carts
        self._catalog = catalog

    def load_complete_cart(self, user_id: str) -> Result[CompleteCart, EmptyCartError | ProductNotAvailableError]:
        cart = self._carts.load_by_user_id(user_id)
        if cart is None or not cart.products:
            return Err(EmptyCartError())

        products = {
            product.id: product
            for product in self._catalog.load_many_by_ids([line.product_id for line in cart.products])
        }

        items = []
        for line in cart.products:
            product = products.get(line.product_id)
            if product is None:
                logger.warning("Cart references a missing product", cart_id=cart.id, product_id=line.product_id)
                return Err(ProductNotAvailableError(line.product_id))
            items.append(
                CompleteCartItem(
                    product_id=line.product_id,
                    name=product.name,
                    amount=product.amount,
                    quantity=line.quantity,
                )
            )

        return Ok(CompleteCart(id=cart.id, user_id=cart.user_id, items=tuple(items)))
