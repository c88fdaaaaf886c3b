"""Shared BDD fixtures and step definitions for payment reconciliation."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest
from ordering.checkout.purchase_intent import order_code_for
from ordering.checkout.store import PurchaseIntentRecord, PurchaseItem
from ordering.order.order import Order
from pytest_bdd import given, parsers, then


@pytest.fixture
def outcome():
    return {}


@pytest.fixture
def shopper():
    return {}


@given("a registered shopper")
def registered_shopper(register_customer, shopper):
    shopper["id"] = register_customer(name="Ada", email="ada@example.com")


@given(parsers.cfparse('an open purchase intent "{purchase_intent_id}" for the shopper'))
def open_purchase_intent(intents, shopper, purchase_intent_id):
    now = datetime.now(UTC)
    intents.save(
        PurchaseIntentRecord(
            id=purchase_intent_id,
            user_id=shopper["id"],
            order_code=order_code_for(purchase_intent_id),
            created_at=now,
            updated_at=now,
            products=(PurchaseItem(id="prod-001", name="Espresso Cup", amount=Decimal("10.90"), quantity=2),),
        )
    )


@then("the delivery is accepted")
def delivery_accepted(outcome):
    assert outcome["result"].is_ok()


@then(parsers.cfparse('the delivery is rejected with "{error_name}"'))
def delivery_rejected(outcome, error_name):
    assert outcome["result"].is_err()
    assert outcome["result"].error.name == error_name


@then(parsers.cfparse('exactly {count:d} order exists for "{purchase_intent_id}"'))
def order_count(ordering, count, purchase_intent_id):
    with ordering.domain_context():
        stored = ordering.repository_for(Order)._dao.query.filter(purchase_intent_id=purchase_intent_id).all()
    assert stored.total == count
