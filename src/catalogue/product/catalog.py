"""Catalog port (read-only product lookup) and its Protean adapter."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from protean.domain import Domain
from protean.exceptions import ObjectNotFoundError

from catalogue.product.product import Product


@dataclass(frozen=True)
class ProductRecord:
    """Read model of a product as seen by the ordering pipeline."""

    id: str
    name: str
    amount: Decimal
    description: str | None = None


class Catalog(ABC):
    @abstractmethod
    def load_by_id(self, product_id: str) -> ProductRecord | None:
        """Return the product, or ``None`` when the id is unknown."""
        ...

    @abstractmethod
    def load_many_by_ids(self, product_ids: Iterable[str]) -> list[ProductRecord]:
        """Return the products that exist among ``product_ids``.

        Unknown ids are simply absent from the result; no ordering is
        guaranteed.
        """
        ...


def to_record(product: Product) -> ProductRecord:
    return ProductRecord(
        id=str(product.id),
        name=product.name,
        amount=Decimal(str(product.amount)),
        description=product.description,
    )


class ProteanCatalog(Catalog):
    """Catalog backed by the catalogue domain's Product repository."""

    def __init__(self, domain: Domain) -> None:
        self._domain = domain

    def load_by_id(self, product_id: str) -> ProductRecord | None:
        with self._domain.domain_context():
            try:
                product = self._domain.repository_for(Product).get(product_id)
            except ObjectNotFoundError:
                return None
            return to_record(product)

    def load_many_by_ids(self, product_ids: Iterable[str]) -> list[ProductRecord]:
        ids = list(dict.fromkeys(str(pid) for pid in product_ids))
        with self._domain.domain_context():
            products = self._domain.repository_for(Product).find_many(ids)
            return [to_record(product) for product in products]
