"""Application tests for adding products to a user's cart."""

import threading
import time
from decimal import Decimal
from unittest.mock import call, create_autospec

import pytest
from catalogue.errors import ProductNotFoundError
from catalogue.product.catalog import Catalog, ProductRecord
from ordering.cart.consolidation import AddProductToCart
from ordering.cart.store import Cart, CartLine, CartStore, ProteanCartStore
from ordering.errors import CartWriteConflictError, InvalidProductQuantityError
from shared.ids import IdGenerator
from shared.locks import KeyedLock

CUP = ProductRecord(id="prod-001", name="Espresso Cup", amount=Decimal("10.90"))


@pytest.fixture
def add_to_cart(catalog, carts, ids):
    return AddProductToCart(catalog, carts, ids)


class TestAddProductToCart:
    def test_first_add_opens_a_cart(self, add_to_cart, carts, add_product):
        product_id = add_product()

        result = add_to_cart.add_product("user-001", product_id, 2)

        assert result.is_ok()
        cart = carts.load_by_user_id("user-001")
        assert cart.products == (CartLine(product_id=product_id, quantity=2),)

    def test_same_product_twice_merges_quantities(self, add_to_cart, carts, add_product):
        product_id = add_product()

        add_to_cart.add_product("user-001", product_id, 2)
        add_to_cart.add_product("user-001", product_id, 3)

        cart = carts.load_by_user_id("user-001")
        assert cart.products == (CartLine(product_id=product_id, quantity=5),)

    def test_other_product_is_appended(self, add_to_cart, carts, add_product):
        cup = add_product(name="Espresso Cup")
        pot = add_product(name="Moka Pot", amount=34.50)

        add_to_cart.add_product("user-001", cup, 1)
        add_to_cart.add_product("user-001", pot, 1)

        cart = carts.load_by_user_id("user-001")
        assert [line.product_id for line in cart.products] == [cup, pot]

    def test_carts_are_kept_per_user(self, add_to_cart, carts, add_product):
        product_id = add_product()

        add_to_cart.add_product("user-001", product_id, 1)
        add_to_cart.add_product("user-002", product_id, 4)

        assert carts.load_by_user_id("user-001").products[0].quantity == 1
        assert carts.load_by_user_id("user-002").products[0].quantity == 4

    def test_unknown_product_leaves_cart_untouched(self, add_to_cart, carts):
        result = add_to_cart.add_product("user-001", "no-such-product", 1)

        assert result.is_err()
        assert result.error == ProductNotFoundError("no-such-product")
        assert carts.load_by_user_id("user-001") is None


class TestStorageWrites:
    """One call makes exactly one write, and a refused call makes none."""

    @pytest.fixture
    def store(self):
        return create_autospec(CartStore, instance=True)

    @pytest.fixture
    def use_case(self, store):
        catalog = create_autospec(Catalog, instance=True)
        catalog.load_by_id.return_value = CUP
        ids = create_autospec(IdGenerator, instance=True)
        ids.new_id.return_value = "cart-001"
        return AddProductToCart(catalog, store, ids)

    @pytest.mark.parametrize("quantity", [0, -1, -10])
    def test_invalid_quantity_never_writes(self, use_case, store, quantity):
        result = use_case.add_product("user-001", "prod-001", quantity)

        assert result.is_err()
        assert isinstance(result.error, InvalidProductQuantityError)
        assert store.method_calls == []

    def test_no_cart_creates(self, use_case, store):
        store.load_by_user_id.return_value = None

        use_case.add_product("user-001", "prod-001", 2)

        store.create.assert_called_once_with(
            Cart(id="cart-001", user_id="user-001", products=(CartLine("prod-001", 2),))
        )
        store.append_product.assert_not_called()
        store.update_quantity.assert_not_called()

    def test_existing_line_updates_quantity(self, use_case, store):
        store.load_by_user_id.return_value = Cart(
            id="cart-001", user_id="user-001", products=(CartLine("prod-001", 2),), version=3
        )

        use_case.add_product("user-001", "prod-001", 3)

        store.update_quantity.assert_called_once_with("cart-001", "prod-001", 5, expected_version=3)
        store.create.assert_not_called()
        store.append_product.assert_not_called()

    def test_missing_line_appends(self, use_case, store):
        store.load_by_user_id.return_value = Cart(
            id="cart-001", user_id="user-001", products=(CartLine("prod-002", 1),), version=3
        )

        use_case.add_product("user-001", "prod-001", 1)

        store.append_product.assert_called_once_with("cart-001", CartLine("prod-001", 1), expected_version=3)
        store.create.assert_not_called()
        store.update_quantity.assert_not_called()

    def test_conflicting_write_is_merged_again_from_a_fresh_read(self, use_case, store):
        store.load_by_user_id.side_effect = [
            Cart(id="cart-001", user_id="user-001", products=(CartLine("prod-001", 2),), version=3),
            Cart(id="cart-001", user_id="user-001", products=(CartLine("prod-001", 4),), version=4),
        ]
        store.update_quantity.side_effect = [CartWriteConflictError("cart-001"), None]

        result = use_case.add_product("user-001", "prod-001", 1)

        assert result.is_ok()
        assert store.update_quantity.call_args_list == [
            call("cart-001", "prod-001", 3, expected_version=3),
            call("cart-001", "prod-001", 5, expected_version=4),
        ]

    def test_lost_create_race_appends_to_the_winners_cart(self, use_case, store):
        store.load_by_user_id.side_effect = [
            None,
            Cart(id="cart-999", user_id="user-001", products=(CartLine("prod-002", 1),), version=0),
        ]
        store.create.side_effect = CartWriteConflictError("cart-001")

        assert use_case.add_product("user-001", "prod-001", 1).is_ok()

        store.append_product.assert_called_once_with("cart-999", CartLine("prod-001", 1), expected_version=0)

    def test_conflicts_beyond_the_attempt_limit_propagate(self, use_case, store):
        store.load_by_user_id.return_value = Cart(
            id="cart-001", user_id="user-001", products=(CartLine("prod-001", 2),), version=3
        )
        store.update_quantity.side_effect = CartWriteConflictError("cart-001")

        with pytest.raises(CartWriteConflictError):
            use_case.add_product("user-001", "prod-001", 1)

        assert store.update_quantity.call_count == 5


    def test_store_failures_propagate(self, use_case, store):
        store.load_by_user_id.side_effect = ConnectionError("storage down")

        with pytest.raises(ConnectionError):
            use_case.add_product("user-001", "prod-001", 1)


class SlowCartStore(ProteanCartStore):
    """Widens the window between reading a cart and writing it back."""

    def load_by_user_id(self, user_id):
        cart = super().load_by_user_id(user_id)
        time.sleep(0.005)
        return cart


class TestConcurrentAdds:
    def test_no_increment_is_lost(self, ordering, catalog, ids, carts, add_product):
        product_id = add_product()
        use_case = AddProductToCart(catalog, SlowCartStore(ordering), ids, KeyedLock())
        errors = []

        def add_one():
            try:
                result = use_case.add_product("user-001", product_id, 1)
                assert result.is_ok()
            except Exception as exc:  # noqa: BLE001
                errors.append(exc)

        threads = [threading.Thread(target=add_one) for _ in range(10)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        cart = carts.load_by_user_id("user-001")
        assert cart.products == (CartLine(product_id=product_id, quantity=10),)


class InterleavingCartStore(ProteanCartStore):
    """Runs ``between`` once, right after the first read, as another instance would."""

    def __init__(self, domain, between):
        super().__init__(domain)
        self._between = between

    def load_by_user_id(self, user_id):
        cart = super().load_by_user_id(user_id)
        between, self._between = self._between, None
        if between is not None:
            between()
        return cart


class TestInstancesWithoutSharedLock:
    """Two service instances share the storage but not an in-process lock."""

    def test_increment_from_other_instance_survives(self, ordering, catalog, ids, carts, add_product):
        product_id = add_product()
        other = AddProductToCart(catalog, ProteanCartStore(ordering), ids, KeyedLock())
        other.add_product("user-001", product_id, 1)

        this = AddProductToCart(
            catalog,
            InterleavingCartStore(ordering, between=lambda: other.add_product("user-001", product_id, 1)),
            ids,
            KeyedLock(),
        )
        result = this.add_product("user-001", product_id, 1)

        assert result.is_ok()
        assert carts.load_by_user_id("user-001").products == (CartLine(product_id=product_id, quantity=3),)

    def test_append_from_other_instance_survives(self, ordering, catalog, ids, carts, add_product):
        cup = add_product(name="Espresso Cup")
        pot = add_product(name="Moka Pot", amount=34.50)
        other = AddProductToCart(catalog, ProteanCartStore(ordering), ids, KeyedLock())
        other.add_product("user-001", cup, 1)

        this = AddProductToCart(
            catalog,
            InterleavingCartStore(ordering, between=lambda: other.add_product("user-001", pot, 2)),
            ids,
            KeyedLock(),
        )
        this.add_product("user-001", cup, 1)

        cart = carts.load_by_user_id("user-001")
        assert cart.products == (CartLine(product_id=cup, quantity=2), CartLine(product_id=pot, quantity=2))

    def test_cart_opened_by_other_instance_is_reused(self, ordering, catalog, ids, carts, add_product):
        product_id = add_product()
        other = AddProductToCart(catalog, ProteanCartStore(ordering), ids, KeyedLock())

        this = AddProductToCart(
            catalog,
            InterleavingCartStore(ordering, between=lambda: other.add_product("user-001", product_id, 2)),
            ids,
            KeyedLock(),
        )
        result = this.add_product("user-001", product_id, 1)

        assert result.is_ok()
        assert carts.load_by_user_id("user-001").products == (CartLine(product_id=product_id, quantity=3),)
