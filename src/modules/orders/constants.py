"""Order domain constants.

Defines status choices, the guarded status transitions of the order
state machine and the discount rules applied at order placement.
"""

from decimal import Decimal

from django.db import models


class OrderStatus(models.TextChoices):
    PENDING = "Pending", "Pending"
    COMPLETED = "Completed", "Completed"
    CANCELLED = "Cancelled", "Cancelled"


VALID_TRANSITIONS: dict[str, set[str]] = {
    OrderStatus.PENDING: {OrderStatus.COMPLETED, OrderStatus.CANCELLED},
    OrderStatus.COMPLETED: set(),
    OrderStatus.CANCELLED: set(),
}

TERMINAL_STATES: set[str] = {OrderStatus.COMPLETED, OrderStatus.CANCELLED}

CLAIM_CODE_LENGTH = 8
CLAIM_CODE_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
CLAIM_CODE_MAX_RETRIES = 5

# Quantity discount: total books in the order reaches the threshold.
BULK_DISCOUNT_MIN_QUANTITY = 5
BULK_DISCOUNT_RATE = Decimal("0.05")

# Loyalty discount: the order would be the Nth completed order, N % 10 == 0.
LOYALTY_DISCOUNT_EVERY = 10
LOYALTY_DISCOUNT_RATE = Decimal("0.10")

NOTIFICATION_TYPE = "Order"
ORDER_COMPLETED_CONTENT = "Order Completed"
