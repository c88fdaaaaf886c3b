"""Ordering bounded context: Shopping Cart, Purchase Intents and Orders.

Carries the cart-to-order pipeline: carts are consolidated per user, frozen
into priced purchase intents at checkout, and materialized into orders once
the payment gateway reports success.
"""

from protean.domain import Domain

ordering = Domain(name="ordering")
