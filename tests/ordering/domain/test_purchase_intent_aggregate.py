"""Tests for the PurchaseIntent aggregate and order codes."""

from datetime import UTC, datetime

import pytest
from ordering.checkout.events import PurchaseIntentCompleted, PurchaseIntentCreated, PurchaseIntentReleased
from ordering.checkout.purchase_intent import PurchaseIntent, PurchaseIntentStatus, order_code_for
from protean.exceptions import ValidationError

LINES = [
    {"product_id": "prod-001", "name": "Espresso Cup", "amount": 10.90, "quantity": 2},
    {"product_id": "prod-002", "name": "Moka Pot", "amount": 34.50, "quantity": 1},
]


def _freeze(**overrides):
    defaults = {"purchase_intent_id": "pi-0001", "user_id": "user-001", "lines": LINES}
    defaults.update(overrides)
    return PurchaseIntent.freeze(**defaults)


class TestOrderCode:
    def test_code_is_derived_from_intent_id(self):
        assert order_code_for("pi1") == "ORD-PI1"

    def test_code_drops_separators_and_is_capped(self):
        code = order_code_for("3f0c8f0e-5f7a-4a8e-9d1e-2f6b7c9a1b2c")
        assert code == "ORD-3F0C8F0E5F7A"

    def test_code_is_deterministic(self):
        assert order_code_for("pi-42") == order_code_for("pi-42")


class TestFreeze:
    def test_freeze_copies_lines(self):
        intent = _freeze()
        assert intent.status == PurchaseIntentStatus.OPEN.value
        assert intent.order_code == order_code_for("pi-0001")
        assert [(str(line.product_id), line.quantity) for line in intent.lines] == [
            ("prod-001", 2),
            ("prod-002", 1),
        ]

    def test_freeze_keeps_given_timestamp(self):
        created_at = datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)
        intent = _freeze(created_at=created_at)
        assert intent.created_at == created_at
        assert intent.updated_at == created_at

    def test_freeze_raises_created_event_with_total(self):
        intent = _freeze()
        event = intent._events[-1]
        assert isinstance(event, PurchaseIntentCreated)
        assert event.total == 56.30

    def test_freeze_without_lines_is_rejected(self):
        with pytest.raises(ValidationError):
            _freeze(lines=[])


class TestStatusTransitions:
    def test_complete(self):
        intent = _freeze()
        intent._events.clear()
        intent.complete()
        assert intent.status == PurchaseIntentStatus.COMPLETED.value
        assert isinstance(intent._events[-1], PurchaseIntentCompleted)

    def test_complete_twice_is_a_no_op(self):
        intent = _freeze()
        intent.complete()
        intent._events.clear()
        intent.complete()
        assert intent._events == []

    def test_release(self):
        intent = _freeze()
        intent.release()
        assert intent.status == PurchaseIntentStatus.RELEASED.value
        assert isinstance(intent._events[-1], PurchaseIntentReleased)

    def test_released_intent_can_still_complete(self):
        intent = _freeze()
        intent.release()
        intent.complete()
        assert intent.status == PurchaseIntentStatus.COMPLETED.value

    def test_completed_intent_cannot_be_released(self):
        intent = _freeze()
        intent.complete()
        with pytest.raises(ValidationError):
            intent.release()
