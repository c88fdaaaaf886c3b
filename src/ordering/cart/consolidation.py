"""Cart consolidation: merges a (product, quantity) request into a user's cart.

Exactly one storage write happens per successful call, picked by two
questions: does the user have a cart, and does it already hold the product?

    no cart                  -> create a cart with a single line
    cart holds the product   -> update that line to existing + quantity
    cart lacks the product   -> append a new line

Within a process the load and the write run under a per-user lock. Across
processes every write is conditional on the cart version that was read; a
write that loses to another instance reloads the cart and merges again.
"""

import structlog

from catalogue.errors import ProductNotFoundError
from catalogue.product.catalog import Catalog
from ordering.cart.store import Cart, CartLine, CartStore
from ordering.errors import CartWriteConflictError, InvalidProductQuantityError
from shared.ids import IdGenerator
from shared.locks import KeyedLock
from shared.result import Err, Ok, Result

logger = structlog.get_logger(__name__)


class AddProductToCart:
    def __init__(
        self,
        catalog: Catalog,
        carts: CartStore,
        ids: IdGenerator,
        locks: KeyedLock | None = None,
        max_attempts: int = 5,
    ) -> None:
        self._catalog = catalog
        self._carts = carts
        self._ids = ids
        self._locks = locks or KeyedLock()
        self._max_attempts = max_attempts

    def add_product(
        self, user_id: str, product_id: str, quantity: int
    ) -> Result[None, InvalidProductQuantityError | ProductNotFoundError]:
        if quantity < 1:
            return Err(InvalidProductQuantityError())

        if self._catalog.load_by_id(product_id) is None:
            logger.info("Refused to add unknown product to cart", user_id=user_id, product_id=product_id)
            return Err(ProductNotFoundError(product_id))

        with self._locks.hold(str(user_id)):
            for attempt in range(1, self._max_attempts + 1):
                try:
                    self._merge(str(user_id), str(product_id), quantity)
                    return Ok(None)
                except CartWriteConflictError:
                    if attempt == self._max_attempts:
                        logger.error("Gave up merging into contended cart", user_id=user_id, attempts=attempt)
                        raise
                    logger.info("Cart changed concurrently, merging again", user_id=user_id, attempt=attempt)

    def _merge(self, user_id: str, product_id: str, quantity: int) -> None:
        cart = self._carts.load_by_user_id(user_id)

        if cart is None:
            cart_id = self._ids.new_id()
            self._carts.create(
                Cart(id=cart_id, user_id=user_id, products=(CartLine(product_id=product_id, quantity=quantity),))
            )
            logger.info("Opened cart", cart_id=cart_id, user_id=user_id, product_id=product_id, quantity=quantity)
            return

        line = cart.line_for(product_id)
        if line is not None:
            new_quantity = line.quantity + quantity
            self._carts.update_quantity(cart.id, product_id, new_quantity, expected_version=cart.version)
            logger.info(
                "Merged product quantity",
                cart_id=cart.id,
                product_id=product_id,
                previous_quantity=line.quantity,
                new_quantity=new_quantity,
            )
        else:
            self._carts.append_product(
                cart.id, CartLine(product_id=product_id, quantity=quantity), expected_version=cart.version
            )
            logger.info("Appended product to cart", cart_id=cart.id, product_id=product_id, quantity=quantity)
