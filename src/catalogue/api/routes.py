"""FastAPI endpoints for the Catalogue domain."""

from fastapi import APIRouter, Depends

from catalogue.api.schemas import AddProductRequest, ProductIdResponse, ProductResponse
from catalogue.product.creation import AddProduct
from storefront.dependencies import admin_user_id, get_container
from storefront.http import unwrap

product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.post("", status_code=201, response_model=ProductIdResponse)
def add_product(
    body: AddProductRequest,
    _admin: str = Depends(admin_user_id),
    container=Depends(get_container),
) -> ProductIdResponse:
    command = AddProduct(name=body.name, amount=body.amount, description=body.description)
    with container.catalogue.domain_context():
        result = container.catalogue.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: str, container=Depends(get_container)) -> ProductResponse:
    product = unwrap(container.load_product.load(product_id))
    return ProductResponse(
        id=product.id,
        name=product.name,
        amount=float(product.amount),
        description=product.description,
    )
