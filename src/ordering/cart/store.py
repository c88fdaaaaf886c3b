"""Cart store port and its Protean adapter.

The port speaks in plain frozen snapshots (``Cart``/``CartLine``) so the
use cases never hold a live aggregate between the load and the write.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from operator import attrgetter

from protean.domain import Domain
from protean.exceptions import ExpectedVersionError, ValidationError

from ordering.cart.cart import ShoppingCart
from ordering.errors import CartWriteConflictError


@dataclass(frozen=True)
class CartLine:
    product_id: str
    quantity: int


@dataclass(frozen=True)
class Cart:
    id: str
    user_id: str
    products: tuple[CartLine, ...] = ()
    version: int | None = None

    def line_for(self, product_id: str) -> CartLine | None:
        return next((line for line in self.products if line.product_id == str(product_id)), None)


class CartStore(ABC):
    """Writes that take an ``expected_version`` refuse to apply over a cart that
    changed since that version was read, raising ``CartWriteConflictError``.
    ``create`` raises it when the user already has a cart.
    """

    @abstractmethod
    def load_by_user_id(self, user_id: str) -> Cart | None: ...

    @abstractmethod
    def create(self, cart: Cart) -> None:
        """Persist a brand-new cart. ``cart.products`` must hold at least one line."""
        ...

    @abstractmethod
    def append_product(self, cart_id: str, line: CartLine, expected_version: int | None = None) -> None: ...

    @abstractmethod
    def update_quantity(
        self, cart_id: str, product_id: str, quantity: int, expected_version: int | None = None
    ) -> None: ...


def to_snapshot(cart: ShoppingCart) -> Cart:
    items = list(cart.items)
    if all(item.added_at for item in items):
        items.sort(key=attrgetter("added_at"))
    return Cart(
        id=str(cart.id),
        user_id=str(cart.user_id),
        products=tuple(CartLine(product_id=str(item.product_id), quantity=item.quantity) for item in items),
        version=cart._version,
    )


class ProteanCartStore(CartStore):
    def __init__(self, domain: Domain) -> None:
        self._domain = domain

    def load_by_user_id(self, user_id: str) -> Cart | None:
        with self._domain.domain_context():
            cart = self._domain.repository_for(ShoppingCart).find_by_user(user_id)
            return to_snapshot(cart) if cart is not None else None

    def create(self, cart: Cart) -> None:
        first, *rest = cart.products
        with self._domain.domain_context():
            aggregate = ShoppingCart.open(
                cart_id=cart.id,
                user_id=cart.user_id,
                product_id=first.product_id,
                quantity=first.quantity,
            )
            for line in rest:
                aggregate.append_item(line.product_id, line.quantity)
            try:
                self._domain.repository_for(ShoppingCart).add(aggregate)
            except ValidationError as exc:
                # Unique constraint on user_id: another writer opened the cart first
                if "user_id" in exc.messages:
                    raise CartWriteConflictError(cart.id) from exc
                raise

    def append_product(self, cart_id: str, line: CartLine, expected_version: int | None = None) -> None:
        with self._domain.domain_context():
            repo = self._domain.repository_for(ShoppingCart)
            cart = self._get(repo, cart_id, expected_version)
            cart.append_item(line.product_id, line.quantity)
            self._save(repo, cart)

    def update_quantity(
        self, cart_id: str, product_id: str, quantity: int, expected_version: int | None = None
    ) -> None:
        with self._domain.domain_context():
            repo = self._domain.repository_for(ShoppingCart)
            cart = self._get(repo, cart_id, expected_version)
            cart.update_item_quantity(product_id, quantity)
            self._save(repo, cart)

    def _get(self, repo, cart_id: str, expected_version: int | None) -> ShoppingCart:
        cart = repo.get(cart_id)
        if expected_version is not None and cart._version != expected_version:
            raise CartWriteConflictError(cart_id)
        return cart

    def _save(self, repo, cart: ShoppingCart) -> None:
        try:
            repo.add(cart)
        except ExpectedVersionError as exc:
            raise CartWriteConflictError(str(cart.id)) from exc
