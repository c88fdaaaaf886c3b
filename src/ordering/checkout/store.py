"""Purchase intent store port and its Protean adapter."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from protean.domain import Domain
from protean.exceptions import ObjectNotFoundError

from ordering.checkout.purchase_intent import PurchaseIntent, PurchaseIntentStatus


@dataclass(frozen=True)
class PurchaseItem:
    id: str
    name: str
    amount: Decimal
    quantity: int


@dataclass(frozen=True)
class PurchaseIntentRecord:
    id: str
    user_id: str
    order_code: str
    created_at: datetime
    updated_at: datetime
    products: tuple[PurchaseItem, ...]
    status: str = PurchaseIntentStatus.OPEN.value

    @property
    def total(self) -> Decimal:
        return sum((item.amount * item.quantity for item in self.products), Decimal("0"))


class PurchaseIntentStore(ABC):
    @abstractmethod
    def save(self, intent: PurchaseIntentRecord) -> None: ...

    @abstractmethod
    def load_by_id(self, purchase_intent_id: str) -> PurchaseIntentRecord | None: ...

    @abstractmethod
    def mark_completed(self, purchase_intent_id: str) -> None: ...

    @abstractmethod
    def mark_released(self, purchase_intent_id: str) -> None: ...


def to_record(intent: PurchaseIntent) -> PurchaseIntentRecord:
    return PurchaseIntentRecord(
        id=str(intent.id),
        user_id=str(intent.user_id),
        order_code=intent.order_code,
        created_at=intent.created_at,
        updated_at=intent.updated_at,
        status=intent.status,
        products=tuple(
            PurchaseItem(
                id=str(line.product_id),
                name=line.name,
                amount=Decimal(str(line.amount)),
                quantity=line.quantity,
            )
            for line in intent.lines
        ),
    )


class ProteanPurchaseIntentStore(PurchaseIntentStore):
    def __init__(self, domain: Domain) -> None:
        self._domain = domain

    def save(self, intent: PurchaseIntentRecord) -> None:
        with self._domain.domain_context():
            aggregate = PurchaseIntent.freeze(
                purchase_intent_id=intent.id,
                user_id=intent.user_id,
                created_at=intent.created_at,
                lines=[
                    {
                        "product_id": item.id,
                        "name": item.name,
                        "amount": float(item.amount),
                        "quantity": item.quantity,
                    }
                    for item in intent.products
                ],
            )
            self._domain.repository_for(PurchaseIntent).add(aggregate)

    def load_by_id(self, purchase_intent_id: str) -> PurchaseIntentRecord | None:
        with self._domain.domain_context():
            try:
                intent = self._domain.repository_for(PurchaseIntent).get(purchase_intent_id)
            except ObjectNotFoundError:
                return None
            return to_record(intent)

    def mark_completed(self, purchase_intent_id: str) -> None:
        with self._domain.domain_context():
            repo = self._domain.repository_for(PurchaseIntent)
            intent = repo.get(purchase_intent_id)
            intent.complete()
            repo.add(intent)

    def mark_released(self, purchase_intent_id: str) -> None:
        with self._domain.domain_context():
            repo = self._domain.repository_for(PurchaseIntent)
            intent = repo.get(purchase_intent_id)
            intent.release()
            repo.add(intent)
