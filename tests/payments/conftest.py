import hashlib
import hmac
import json
import time
from datetime import UTC, datetime
from decimal import Decimal

import pytest
from ordering.checkout.store import PurchaseIntentRecord, PurchaseItem
from ordering.order.creation import CreateOrder
from ordering.order.update import UpdateOrder
from payments.webhook.parser import StripeEventParser
from payments.webhook.reconciliation import PaymentEventReconciliation
from payments.webhook.signature import StripeSignatureVerifier

WEBHOOK_SECRET = "whsec_test"


@pytest.fixture
def verifier():
    return StripeSignatureVerifier(WEBHOOK_SECRET)


@pytest.fixture
def sign():
    """Factory: a `Stripe-Signature` header for a payload, as the gateway builds it."""

    def _sign(payload, secret=WEBHOOK_SECRET, timestamp=None):
        timestamp = int(time.time()) if timestamp is None else timestamp
        signed = f"{timestamp}.{payload}".encode()
        digest = hmac.new(secret.encode(), signed, hashlib.sha256).hexdigest()
        return f"t={timestamp},v1={digest}"

    return _sign


@pytest.fixture
def gateway_event():
    """Factory: the JSON body of a Checkout Session webhook."""

    def _event(
        event_type="checkout.session.completed",
        purchase_intent_id="pi1",
        user_id="user-001",
        payment_status="paid",
        event_id="evt_001",
    ):
        metadata = {}
        if purchase_intent_id is not None:
            metadata["purchase_intent_id"] = purchase_intent_id
        if user_id is not None:
            metadata["user_id"] = user_id
        return json.dumps(
            {
                "id": event_id,
                "object": "event",
                "type": event_type,
                "created": 1767225600,
                "data": {
                    "object": {
                        "id": "cs_test_001",
                        "object": "checkout.session",
                        "client_reference_id": purchase_intent_id,
                        "payment_status": payment_status,
                        "metadata": metadata,
                    }
                },
            }
        )

    return _event


@pytest.fixture
def reconciliation(verifier, users, intents, orders, ids):
    return PaymentEventReconciliation(
        verifier=verifier,
        parser=StripeEventParser(),
        users=users,
        intents=intents,
        orders=orders,
        create_order=CreateOrder(intents, orders, ids),
        update_order=UpdateOrder(orders),
    )


@pytest.fixture
def open_intent(intents, register_customer):
    """An open purchase intent ``pi1`` belonging to a registered shopper."""
    user_id = register_customer(name="Ada", email="ada@example.com")
    now = datetime.now(UTC)
    record = PurchaseIntentRecord(
        id="pi1",
        user_id=user_id,
        order_code="ORD-PI1",
        created_at=now,
        updated_at=now,
        products=(PurchaseItem(id="prod-001", name="Espresso Cup", amount=Decimal("10.90"), quantity=2),),
    )
    intents.save(record)
    return record
