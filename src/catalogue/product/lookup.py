"""Single product lookup for the storefront's product pages."""

import structlog

from catalogue.errors import ProductNotFoundError
from catalogue.product.catalog import Catalog, ProductRecord
from shared.result import Err, Ok, Result

logger = structlog.get_logger(__name__)


class LoadProductById:
    def __init__(self, catalog: Catalog) -> None:
        self._catalog = catalog

    def load(self, product_id: str) -> Result[ProductRecord, ProductNotFoundError]:
        product = self._catalog.load_by_id(product_id)
        if product is None:
            logger.info("Product lookup missed", product_id=product_id)
            return Err(ProductNotFoundError(product_id))
        return Ok(product)
