"""Tests for the ShoppingCart aggregate."""

import pytest
from ordering.cart.cart import ShoppingCart
from ordering.cart.events import CartItemAdded, CartOpened, CartQuantityUpdated
from protean.exceptions import ValidationError


def _open_cart(**overrides):
    defaults = {"cart_id": "cart-001", "user_id": "user-001", "product_id": "prod-001", "quantity": 2}
    defaults.update(overrides)
    return ShoppingCart.open(**defaults)


class TestCartOpen:
    def test_open_holds_a_single_line(self):
        cart = _open_cart()
        assert str(cart.user_id) == "user-001"
        assert len(cart.items) == 1
        assert str(cart.items[0].product_id) == "prod-001"
        assert cart.items[0].quantity == 2

    def test_open_raises_opened_and_added_events(self):
        cart = _open_cart()
        assert [type(event) for event in cart._events] == [CartOpened, CartItemAdded]

    def test_open_with_zero_quantity_is_rejected(self):
        with pytest.raises(ValidationError):
            _open_cart(quantity=0)


class TestCartItems:
    def test_append_new_product(self):
        cart = _open_cart()
        cart.append_item("prod-002", 1)
        assert [str(item.product_id) for item in cart.items] == ["prod-001", "prod-002"]

    def test_append_existing_product_is_rejected(self):
        cart = _open_cart()
        with pytest.raises(ValidationError) as exc_info:
            cart.append_item("prod-001", 1)
        assert "product_id" in exc_info.value.messages
        assert len(cart.items) == 1

    def test_update_quantity(self):
        cart = _open_cart()
        cart._events.clear()

        cart.update_item_quantity("prod-001", 5)

        assert cart.item_for("prod-001").quantity == 5
        assert len(cart._events) == 1
        event = cart._events[0]
        assert isinstance(event, CartQuantityUpdated)
        assert event.previous_quantity == 2
        assert event.new_quantity == 5

    def test_update_quantity_of_missing_product_is_rejected(self):
        cart = _open_cart()
        with pytest.raises(ValidationError):
            cart.update_item_quantity("prod-999", 5)

    def test_item_for_unknown_product(self):
        assert _open_cart().item_for("prod-999") is None
