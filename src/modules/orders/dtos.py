"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateOrderItemDTO``: input for a single order line item.
- ``CreateOrderDTO``: input for order creation (nested items).
- ``OrderPlacementDTO``: outcome of a successful placement.

Business preconditions (non-empty items, positive book ids) are checked
by ``OrderService`` so that the whole order is rejected with
``InvalidOrderRequest``.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from modules.orders.pricing import CENTS

# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateOrderItemDTO(BaseModel):
    """Immutable DTO for a single order item in a creation request.

    ``unit_price`` is the price the client saw; whether it is trusted is
    decided by the Service Layer.
    """

    model_config = ConfigDict(frozen=True)

    book_id: int
    quantity: int
    unit_price: Decimal

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v

    @field_validator("unit_price")
    @classmethod
    def unit_price_in_cents(cls, v: Decimal) -> Decimal:
        """Round to cents so line subtotals match the stored item prices."""
        if v < 0:
            raise ValueError("Unit price cannot be negative.")
        return v.quantize(CENTS, rounding=ROUND_HALF_UP)


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests."""

    model_config = ConfigDict(frozen=True)

    user_id: Optional[str] = None
    items: List[CreateOrderItemDTO] = []


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class OrderPlacementDTO(BaseModel):
    """Immutable result of ``OrderService.create_order``."""

    model_config = ConfigDict(frozen=True)

    order_id: int
    claim_code: str
    subtotal: Decimal
    discount: Decimal
    total_amount: Decimal
    discount_messages: List[str]

    @property
    def discount_summary(self) -> str:
        if not self.discount_messages:
            return "No discount applied."
        return " and ".join(self.discount_messages) + " applied."
