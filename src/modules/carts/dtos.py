"""Cart DTOs for the Service Layer."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class AddToCartDTO(BaseModel):
    """Immutable DTO for adding a book to the caller's cart."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    book_id: int
    quantity: int = 1

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v
