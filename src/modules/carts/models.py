"""Cart entries: a user's pending intent to buy a book.

Entries are removed by the order workflow once an order covering the book
is placed for the same user.
"""

from __future__ import annotations

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import TimeStampedModel


class CartEntry(TimeStampedModel):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="cart_entries",
    )
    book = models.ForeignKey(
        "catalog.Book",
        on_delete=models.CASCADE,
        related_name="cart_entries",
    )
    quantity = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
    )

    class Meta:
        db_table = "cart_entries"
        ordering = ["created_at", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "book"],
                name="cart_entries_user_book_unique",
            ),
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="cart_entries_quantity_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.user_id}: {self.book_id} x{self.quantity}"
