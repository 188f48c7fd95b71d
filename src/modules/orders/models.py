"""Order and OrderItem models.

Business rules implemented:
- Status transitions only ``Pending -> Completed`` or ``Pending -> Cancelled``
  (enforced at service layer through ``can_transition_to``).
- Claim code: 8 characters, unique, generated on first save and never
  changed afterwards.
- ``total_amount`` is post-discount; ``total_amount + discount_applied``
  equals the sum of the item subtotals.
- OrderItem snapshots the unit price at order time (``unit_price``) and
  keeps ``subtotal = quantity * unit_price`` (calculated on save).
- Items are owned by their order (CASCADE); orders are never deleted by
  the workflow, and the user FK uses PROTECT to preserve sales history.
"""

from __future__ import annotations

import secrets
from decimal import Decimal
from typing import Any

import structlog
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from modules.core.models import TimeStampedModel
from modules.orders.constants import (
    CLAIM_CODE_ALPHABET,
    CLAIM_CODE_LENGTH,
    CLAIM_CODE_MAX_RETRIES,
    TERMINAL_STATES,
    VALID_TRANSITIONS,
    OrderStatus,
)
from modules.orders.exceptions import ClaimCodeExhausted
from shared.domain.events import DomainEventMixin

logger = structlog.get_logger(__name__)


class Order(DomainEventMixin, TimeStampedModel):
    """Order aggregate root.

    ``claim_code`` is the human-shareable identifier presented at the
    pickup counter; it doubles as a bearer capability for look-up and
    completion.  The integer ``id`` is used for owner-authenticated
    operations (cancellation).
    """

    user: models.ForeignKey = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="orders",
    )
    order_date: models.DateTimeField = models.DateTimeField(default=timezone.now)
    completed_at: models.DateTimeField = models.DateTimeField(null=True, blank=True)
    status: models.CharField = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
    )
    claim_code: models.CharField = models.CharField(
        max_length=CLAIM_CODE_LENGTH, unique=True, editable=False
    )
    total_amount: models.DecimalField = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    discount_applied: models.DecimalField = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )

    class Meta:
        db_table = "orders"
        ordering = ["-order_date", "-id"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["user", "status"], name="orders_user_status_idx"),
            models.Index(fields=["completed_at"], name="orders_completed_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(discount_applied__gte=0),
                name="orders_discount_non_negative",
            ),
        ]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATES

    def can_transition_to(self, new_status: str) -> bool:
        """Pending orders may be collected or cancelled; nothing leaves a terminal state."""
        return new_status in VALID_TRANSITIONS.get(self.status, ())

    @property
    def subtotal(self) -> Decimal:
        """Pre-discount amount."""
        return self.total_amount + self.discount_applied

    # ------------------------------------------------------------------
    # Claim code generation
    # ------------------------------------------------------------------

    @staticmethod
    def generate_claim_code() -> str:
        """Random ``A-Z0-9`` token of ``CLAIM_CODE_LENGTH`` characters."""
        return "".join(
            secrets.choice(CLAIM_CODE_ALPHABET) for _ in range(CLAIM_CODE_LENGTH)
        )

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args: Any, **kwargs: Any) -> None:
        if not self.claim_code:
            for attempt in range(CLAIM_CODE_MAX_RETRIES):
                candidate = self.generate_claim_code()
                if not Order.objects.filter(claim_code=candidate).exists():
                    self.claim_code = candidate
                    break
                logger.warning("order.claim_code_collision", attempt=attempt + 1)
            else:
                raise ClaimCodeExhausted(
                    f"Failed to generate unique claim_code after "
                    f"{CLAIM_CODE_MAX_RETRIES} attempts"
                )
        super().save(*args, **kwargs)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.claim_code} ({self.status})"


class OrderItem(TimeStampedModel):
    """Line item linking an Order to a Book.

    ``unit_price`` is a **snapshot** taken at order time and is never
    re-read from the catalog.  Items keep the request order (ascending id).
    """

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )
    book: models.ForeignKey = models.ForeignKey(
        "catalog.Book",
        on_delete=models.PROTECT,
        related_name="order_items",
    )
    quantity: models.PositiveIntegerField = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
    )
    unit_price: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
    )
    subtotal: models.DecimalField = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        editable=False,
    )

    class Meta:
        db_table = "order_items"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_items_quantity_positive",
            ),
        ]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        if self.quantity is not None and self.quantity < 1:
            raise ValidationError({"quantity": "Quantity must be at least 1."})

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args: Any, **kwargs: Any) -> None:
        if self.unit_price is None:
            raise ValidationError({"unit_price": "Unit price is required."})
        self.subtotal = self.quantity * self.unit_price
        super().save(*args, **kwargs)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.book_id} x{self.quantity} (${self.subtotal})"
