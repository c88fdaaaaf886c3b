"""FastAPI endpoints for the Ordering domain: cart, checkout and orders.

Every use case here makes blocking store and gateway calls, so the routes are
plain ``def`` and FastAPI runs them in its threadpool.
"""

from fastapi import APIRouter, Depends

from ordering.api.schemas import (
    AddProductToCartRequest,
    CheckoutResponse,
    CompleteCartResponse,
    OrderResponse,
    StatusResponse,
    UpdateOrderRequest,
)
from storefront.dependencies import admin_user_id, current_user_id, get_container
from storefront.http import unwrap

# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.post("/products", status_code=201, response_model=StatusResponse)
def add_product_to_cart(
    body: AddProductToCartRequest,
    user_id: str = Depends(current_user_id),
    container=Depends(get_container),
) -> StatusResponse:
    unwrap(container.add_product_to_cart.add_product(user_id, body.product_id, body.quantity))
    return StatusResponse(status="added")


@cart_router.get("", response_model=CompleteCartResponse)
def get_cart(
    user_id: str = Depends(current_user_id),
    container=Depends(get_container),
) -> CompleteCartResponse:
    cart = unwrap(container.load_complete_cart.load_complete_cart(user_id))
    return CompleteCartResponse.from_cart(cart)


# ---------------------------------------------------------------------------
# Checkout Router
# ---------------------------------------------------------------------------
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])


@checkout_router.post("", status_code=201, response_model=CheckoutResponse)
def checkout(
    user_id: str = Depends(current_user_id),
    container=Depends(get_container),
) -> CheckoutResponse:
    session = unwrap(container.checkout.checkout(user_id))
    return CheckoutResponse(session_url=session.session_url)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("/{order_id}", response_model=OrderResponse)
def get_order(
    order_id: str,
    user_id: str = Depends(current_user_id),
    container=Depends(get_container),
) -> OrderResponse:
    order = unwrap(container.load_order.load_order(order_id, owner_id=user_id))
    return OrderResponse.from_record(order)


@order_router.patch("/{order_id}", response_model=OrderResponse)
def update_order(
    order_id: str,
    body: UpdateOrderRequest,
    _admin: str = Depends(admin_user_id),
    container=Depends(get_container),
) -> OrderResponse:
    unwrap(
        container.update_order.update_order(
            order_id,
            status=body.status,
            payment_status=body.payment_status,
        )
    )
    order = unwrap(container.load_order.load_order(order_id))
    return OrderResponse.from_record(order)
