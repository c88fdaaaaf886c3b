"""Order store port and its Protean adapter."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from protean.domain import Domain
from protean.exceptions import ObjectNotFoundError, ValidationError

from ordering.errors import OrderAlreadyExistsError
from ordering.order.order import Order


@dataclass(frozen=True)
class OrderItem:
    id: str
    name: str
    amount: Decimal
    quantity: int


@dataclass(frozen=True)
class OrderRecord:
    id: str
    user_id: str
    purchase_intent_id: str
    order_code: str
    products: tuple[OrderItem, ...]
    status: str
    payment_status: str
    created_at: datetime
    updated_at: datetime

    @property
    def total(self) -> Decimal:
        return sum((item.amount * item.quantity for item in self.products), Decimal("0"))


@dataclass(frozen=True)
class OrderDelta:
    """Partial update. ``None`` means leave the field unchanged."""

    updated_at: datetime
    status: str | None = None
    payment_status: str | None = None


class OrderStore(ABC):
    @abstractmethod
    def add(self, order: OrderRecord) -> None:
        """Persist a new order.

        Raises:
            OrderAlreadyExistsError: an order already exists for the same
                purchase intent.
        """

    @abstractmethod
    def load_by_id(self, order_id: str) -> OrderRecord | None: ...

    @abstractmethod
    def load_by_purchase_intent_id(self, purchase_intent_id: str) -> OrderRecord | None: ...

    @abstractmethod
    def update_by_id(self, order_id: str, delta: OrderDelta) -> None: ...


def to_record(order: Order) -> OrderRecord:
    return OrderRecord(
        id=str(order.id),
        user_id=str(order.user_id),
        purchase_intent_id=str(order.purchase_intent_id),
        order_code=order.order_code,
        status=order.status,
        payment_status=order.payment_status,
        created_at=order.created_at,
        updated_at=order.updated_at,
        products=tuple(
            OrderItem(
                id=str(line.product_id),
                name=line.name,
                amount=Decimal(str(line.amount)),
                quantity=line.quantity,
            )
            for line in order.lines
        ),
    )


class ProteanOrderStore(OrderStore):
    def __init__(self, domain: Domain) -> None:
        self._domain = domain

    def add(self, order: OrderRecord) -> None:
        with self._domain.domain_context():
            repo = self._domain.repository_for(Order)
            if repo.find_by_purchase_intent(order.purchase_intent_id) is not None:
                raise OrderAlreadyExistsError(order.purchase_intent_id)

            aggregate = Order.place(
                order_id=order.id,
                purchase_intent_id=order.purchase_intent_id,
                user_id=order.user_id,
                order_code=order.order_code,
                status=order.status,
                payment_status=order.payment_status,
                placed_at=order.created_at,
                lines=[
                    {
                        "product_id": item.id,
                        "name": item.name,
                        "amount": float(item.amount),
                        "quantity": item.quantity,
                    }
                    for item in order.products
                ],
            )
            try:
                repo.add(aggregate)
            except ValidationError as exc:
                # Unique constraint on purchase_intent_id lost a race
                if "purchase_intent_id" in exc.messages:
                    raise OrderAlreadyExistsError(order.purchase_intent_id) from exc
                raise

    def load_by_id(self, order_id: str) -> OrderRecord | None:
        with self._domain.domain_context():
            try:
                order = self._domain.repository_for(Order).get(order_id)
            except ObjectNotFoundError:
                return None
            return to_record(order)

    def load_by_purchase_intent_id(self, purchase_intent_id: str) -> OrderRecord | None:
        with self._domain.domain_context():
            order = self._domain.repository_for(Order).find_by_purchase_intent(purchase_intent_id)
            return to_record(order) if order is not None else None

    def update_by_id(self, order_id: str, delta: OrderDelta) -> None:
        with self._domain.domain_context():
            repo = self._domain.repository_for(Order)
            order = repo.get(order_id)
            order.apply_update(
                updated_at=delta.updated_at,
                status=delta.status,
                payment_status=delta.payment_status,
            )
            repo.add(order)
