"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from the
records the use cases return.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from ordering.cart.completion import CompleteCart
from ordering.order.store import OrderRecord


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddProductToCartRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "3f0c8f0e-5f7a-4a8e-9d1e-2f6b7c9a1b2c",
                    "quantity": 2,
                }
            ]
        }
    }

    product_id: str
    # Not range-checked here: a quantity below 1 is a domain error.
    quantity: int


class CartItemResponse(BaseModel):
    product_id: str
    name: str
    amount: float
    quantity: int
    subtotal: float


class CompleteCartResponse(BaseModel):
    id: str
    user_id: str
    items: list[CartItemResponse]
    total: float

    @classmethod
    def from_cart(cls, cart: CompleteCart) -> "CompleteCartResponse":
        return cls(
            id=cart.id,
            user_id=cart.user_id,
            items=[
                CartItemResponse(
                    product_id=item.product_id,
                    name=item.name,
                    amount=float(item.amount),
                    quantity=item.quantity,
                    subtotal=float(item.subtotal),
                )
                for item in cart.items
            ],
            total=float(cart.total),
        )


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------
class CheckoutResponse(BaseModel):
    session_url: str


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class UpdateOrderRequest(BaseModel):
    status: Literal["pending", "processing", "shipped", "delivered", "cancelled"] | None = None
    payment_status: Literal["pending", "paid", "failed", "refunded"] | None = None


class OrderItemResponse(BaseModel):
    product_id: str
    name: str
    amount: float
    quantity: int


class OrderResponse(BaseModel):
    id: str
    user_id: str
    order_code: str
    status: str
    payment_status: str
    products: list[OrderItemResponse]
    total: float
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, order: OrderRecord) -> "OrderResponse":
        return cls(
            id=order.id,
            user_id=order.user_id,
            order_code=order.order_code,
            status=order.status,
            payment_status=order.payment_status,
            products=[
                OrderItemResponse(
                    product_id=item.id,
                    name=item.name,
                    amount=float(item.amount),
                    quantity=item.quantity,
                )
                for item in order.products
            ],
            total=float(order.total),
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class StatusResponse(BaseModel):
    status: str
