"""Product creation: command and handler."""

from protean import handle
from protean.fields import Float, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class AddProduct:
    name: String(required=True, max_length=255)
    amount: Float(required=True, min_value=0.0)
    description: Text()


@catalogue.command_handler(part_of=Product)
class AddProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.add(
            name=command.name,
            amount=command.amount,
            description=command.description,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)
