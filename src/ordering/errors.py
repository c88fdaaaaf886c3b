"""Expected failures of the ordering use cases.

Each class is returned inside ``Err``; none of them is raised by the use
cases. ``OrderAlreadyExistsError`` and ``CartWriteConflictError`` are the
exceptions stores raise when a uniqueness or version check rejects a write.
"""

from shared.errors import DomainError


class InvalidProductQuantityError(DomainError):
    default_message = "Product quantity must be at least 1"


class ProductNotAvailableError(DomainError):
    def __init__(self, product_id: str) -> None:
        self.product_id = product_id
        super().__init__(f"Product is no longer available: {product_id}")


class EmptyCartError(DomainError):
    default_message = "Cart is empty"


class CheckoutFailureError(DomainError):
    default_message = "Payment gateway did not open a checkout session"


class PurchaseIntentNotFoundError(DomainError):
    def __init__(self, purchase_intent_id: str) -> None:
        self.purchase_intent_id = purchase_intent_id
        super().__init__(f"Purchase intent not found: {purchase_intent_id}")


class OrderNotFoundError(DomainError):
    def __init__(self, order_id: str) -> None:
        self.order_id = order_id
        super().__init__(f"Order not found: {order_id}")


class OrderAlreadyExistsError(Exception):
    def __init__(self, purchase_intent_id: str) -> None:
        self.purchase_intent_id = purchase_intent_id
        super().__init__(f"An order already exists for purchase intent {purchase_intent_id}")


class CartWriteConflictError(Exception):
    def __init__(self, cart_id: str) -> None:
        self.cart_id = cart_id
        super().__init__(f"Cart {cart_id} changed since it was read")
