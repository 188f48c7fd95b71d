"""Order pricing and discount rules.

Two independent discounts are summed into one factor applied to the
order subtotal:

- quantity discount: 5% when the order holds at least 5 books;
- loyalty discount: 10% when the order would be the user's 10th, 20th,
  ... completed order.

The discount is rounded half-up to cents and never exceeds the
subtotal, so ``total_amount + discount == subtotal`` holds exactly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Protocol

from modules.orders.constants import (
    BULK_DISCOUNT_MIN_QUANTITY,
    BULK_DISCOUNT_RATE,
    LOYALTY_DISCOUNT_EVERY,
    LOYALTY_DISCOUNT_RATE,
)

CENTS = Decimal("0.01")

BULK_DISCOUNT_MESSAGE = "5% quantity discount"
LOYALTY_DISCOUNT_MESSAGE = "10% loyalty discount"


class PricedLine(Protocol):
    quantity: int
    unit_price: Decimal


@dataclass(frozen=True)
class Quote:
    subtotal: Decimal
    total_quantity: int
    factor: Decimal
    discount: Decimal
    total_amount: Decimal
    messages: List[str] = field(default_factory=list)


def qualifies_for_bulk_discount(total_quantity: int) -> bool:
    return total_quantity >= BULK_DISCOUNT_MIN_QUANTITY


def qualifies_for_loyalty_discount(prior_completed: int) -> bool:
    """Loyalty is judged on history, not on the order being placed."""
    return prior_completed > 0 and (prior_completed + 1) % LOYALTY_DISCOUNT_EVERY == 0


def quote(lines: Iterable[PricedLine], prior_completed: int) -> Quote:
    lines = list(lines)
    subtotal = sum(
        (Decimal(line.quantity) * line.unit_price for line in lines), Decimal("0")
    ).quantize(CENTS, rounding=ROUND_HALF_UP)
    total_quantity = sum(line.quantity for line in lines)

    factor = Decimal("0")
    messages: List[str] = []
    if qualifies_for_bulk_discount(total_quantity):
        factor += BULK_DISCOUNT_RATE
        messages.append(BULK_DISCOUNT_MESSAGE)
    if qualifies_for_loyalty_discount(prior_completed):
        factor += LOYALTY_DISCOUNT_RATE
        messages.append(LOYALTY_DISCOUNT_MESSAGE)

    discount = min(
        (subtotal * factor).quantize(CENTS, rounding=ROUND_HALF_UP), subtotal
    )
    return Quote(
        subtotal=subtotal,
        total_quantity=total_quantity,
        factor=factor,
        discount=discount,
        total_amount=subtotal - discount,
        messages=messages,
    )
