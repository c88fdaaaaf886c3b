"""Expected failures of the catalogue use cases."""

from shared.errors import DomainError


class ProductNotFoundError(DomainError):
    def __init__(self, product_id: str) -> None:
        self.product_id = product_id
        super().__init__(f"Product not found: {product_id}")
