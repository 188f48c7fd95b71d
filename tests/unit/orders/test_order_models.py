"""Unit tests for the Order and OrderItem models.

Covers:
- Claim code format, immutability and uniqueness.
- Collision retry and exhaustion.
- State machine helpers.
- OrderItem subtotal calculation.
"""

from __future__ import annotations

import re
from decimal import Decimal
from unittest.mock import patch

import pytest

from modules.orders.constants import (
    CLAIM_CODE_MAX_RETRIES,
    TERMINAL_STATES,
    VALID_TRANSITIONS,
    OrderStatus,
)
from modules.orders.exceptions import ClaimCodeExhausted
from modules.orders.models import Order, OrderItem

pytestmark = pytest.mark.unit

CLAIM_CODE_RE = re.compile(r"^[A-Z0-9]{8}$")


# ---------------------------------------------------------------------------
# Claim code
# ---------------------------------------------------------------------------


class TestClaimCode:
    def test_generated_on_first_save(self, user):
        order = Order(user=user)
        order.save()
        assert CLAIM_CODE_RE.match(order.claim_code)

    def test_not_regenerated_on_update(self, user):
        order = Order(user=user)
        order.save()
        code = order.claim_code

        order.status = OrderStatus.CANCELLED
        order.save()
        order.refresh_from_db()
        assert order.claim_code == code

    def test_ten_thousand_codes_do_not_collide(self):
        codes = {Order.generate_claim_code() for _ in range(10_000)}
        assert len(codes) == 10_000
        assert all(CLAIM_CODE_RE.match(code) for code in codes)

    def test_collision_is_retried(self, user):
        first = Order(user=user)
        first.save()

        with patch.object(
            Order,
            "generate_claim_code",
            side_effect=[first.claim_code, "FRESH001"],
        ):
            second = Order(user=user)
            second.save()

        assert second.claim_code == "FRESH001"

    def test_exhausted_retries_raise(self, user):
        first = Order(user=user)
        first.save()

        with patch.object(Order, "generate_claim_code", return_value=first.claim_code):
            with pytest.raises(ClaimCodeExhausted):
                Order(user=user).save()

        assert Order.objects.count() == 1
        assert CLAIM_CODE_MAX_RETRIES == 5


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------


class TestStateMachine:
    def test_pending_can_complete_or_cancel(self, user):
        order = Order(user=user, status=OrderStatus.PENDING)
        assert order.can_transition_to(OrderStatus.COMPLETED)
        assert order.can_transition_to(OrderStatus.CANCELLED)
        assert not order.is_terminal

    @pytest.mark.parametrize("terminal", sorted(TERMINAL_STATES))
    def test_terminal_states_have_no_exit(self, user, terminal):
        order = Order(user=user, status=terminal)
        assert order.is_terminal
        for target in OrderStatus.values:
            assert not order.can_transition_to(target)

    def test_transition_table_matches_terminal_states(self):
        assert {s for s, targets in VALID_TRANSITIONS.items() if not targets} == (
            TERMINAL_STATES
        )


# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------


class TestOrderItem:
    def test_subtotal_is_quantity_times_unit_price(self, user, book):
        order = Order(user=user)
        order.save()
        item = OrderItem(order=order, book=book, quantity=3, unit_price=Decimal("7.25"))
        item.save()
        assert item.subtotal == Decimal("21.75")

    def test_subtotal_property_adds_discount_back(self, user):
        order = Order(
            user=user,
            total_amount=Decimal("57.00"),
            discount_applied=Decimal("3.00"),
        )
        assert order.subtotal == Decimal("60.00")
