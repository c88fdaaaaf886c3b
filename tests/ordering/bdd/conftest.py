"""Shared BDD fixtures and step definitions for the Ordering domain."""

from decimal import Decimal

import pytest
from ordering.cart.completion import LoadCompleteCart
from ordering.cart.consolidation import AddProductToCart
from pytest_bdd import given, parsers, then

SHOPPER = "user-001"


@pytest.fixture
def listed():
    """Product ids by name."""
    return {}


@pytest.fixture
def outcome():
    return {}


@pytest.fixture
def add_to_cart(catalog, carts, ids):
    return AddProductToCart(catalog, carts, ids)


@pytest.fixture
def complete_carts(carts, catalog):
    return LoadCompleteCart(carts, catalog)


@given(parsers.cfparse('the catalogue lists "{name}" at {amount:f}'))
def catalogue_lists(add_product, listed, name, amount):
    listed[name] = add_product(name=name, amount=amount)


@then(parsers.cfparse('the request fails with "{error_name}"'))
def request_fails(outcome, error_name):
    assert outcome["result"].is_err()
    assert outcome["result"].error.name == error_name


@then(parsers.cfparse("the cart total is {total}"))
def cart_total(complete_carts, total):
    assert complete_carts.load_complete_cart(SHOPPER).value.total == Decimal(total)
