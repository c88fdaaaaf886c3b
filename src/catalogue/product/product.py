"""Product aggregate: immutable reference data priced in a single currency."""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, String, Text

from catalogue.domain import catalogue
from catalogue.product.events import ProductAdded


@catalogue.aggregate
class Product:
    """A sellable item listed in the catalogue.

    Ordering never mutates products; it copies ``name`` and ``amount`` into
    purchase intents at checkout so later price changes cannot leak into an
    in-flight payment.
    """

    name: String(required=True, max_length=255)
    amount: Float(required=True, min_value=0.0)
    description: Text()
    created_at: DateTime()

    @invariant.post
    def name_must_not_be_blank(self):
        if self.name is not None and not self.name.strip():
            raise ValidationError({"name": ["Product name must not be blank"]})

    @classmethod
    def add(cls, name, amount, description=None):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            amount=amount,
            description=description,
            created_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=name,
                amount=amount,
                added_at=now,
            )
        )
        return product


@catalogue.repository(part_of=Product)
class ProductRepository:
    def find_many(self, product_ids) -> list[Product]:
        """Load every product whose id is in ``product_ids`` in one query."""
        if not product_ids:
            return []
        return self._dao.query.filter(id__in=list(product_ids)).all().items
