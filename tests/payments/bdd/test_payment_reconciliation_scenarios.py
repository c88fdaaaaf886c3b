"""BDD tests for payment reconciliation."""

from pytest_bdd import parsers, scenarios, then, when

scenarios("features/payment_reconciliation.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the gateway reports "{event_type}" for "{purchase_intent_id}"'))
def gateway_reports(reconciliation, sign, gateway_event, shopper, outcome, event_type, purchase_intent_id):
    payload = gateway_event(event_type=event_type, purchase_intent_id=purchase_intent_id, user_id=shopper["id"])
    outcome["result"] = reconciliation.handle_event(sign(payload), payload)


@when(parsers.cfparse('a forged callback reports "{event_type}" for "{purchase_intent_id}"'))
def forged_callback(reconciliation, sign, gateway_event, shopper, outcome, event_type, purchase_intent_id):
    payload = gateway_event(event_type=event_type, purchase_intent_id=purchase_intent_id, user_id=shopper["id"])
    forged = sign(payload, secret="whsec_someone_else")
    outcome["result"] = reconciliation.handle_event(forged, payload)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order for "{purchase_intent_id}" has order code "{order_code}"'))
def order_has_code(orders, purchase_intent_id, order_code):
    assert orders.load_by_purchase_intent_id(purchase_intent_id).order_code == order_code


@then(parsers.cfparse('the order for "{purchase_intent_id}" is "{payment_status}"'))
def order_payment_status(orders, purchase_intent_id, payment_status):
    assert orders.load_by_purchase_intent_id(purchase_intent_id).payment_status == payment_status


@then(parsers.cfparse('the purchase intent "{purchase_intent_id}" is "{status}"'))
def intent_status(intents, purchase_intent_id, status):
    assert intents.load_by_id(purchase_intent_id).status == status
