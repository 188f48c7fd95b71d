"""Book model (read-only from the order workflow's perspective).

Business rules implemented:
- ISBN is unique in the catalog.
- Price cannot be negative; stock is a non-negative integer.
- ``created_at`` doubles as the date the book was added to the catalog.
"""

from __future__ import annotations

from decimal import Decimal

import structlog
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from modules.core.models import TimeStampedModel

logger = structlog.get_logger(__name__)


class Book(TimeStampedModel):
    """Catalog entry.

    Discount window fields (``on_sale``, ``discount_percentage`` and the
    start/end dates) describe catalog promotions; they are displayed but
    never applied by the order workflow, which prices orders from the unit
    price captured at order time.
    """

    title = models.CharField(max_length=255)
    isbn = models.CharField(max_length=20, unique=True)
    description = models.TextField(blank=True, default="")
    author = models.CharField(max_length=255)
    genre = models.CharField(max_length=100, blank=True, default="")
    language = models.CharField(max_length=50, blank=True, default="")
    format = models.CharField(max_length=50, blank=True, default="")
    publisher = models.CharField(max_length=255, blank=True, default="")
    publication_date = models.DateField(null=True, blank=True)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    stock = models.PositiveIntegerField(default=0)
    is_available_in_library = models.BooleanField(default=False)
    on_sale = models.BooleanField(default=False)
    discount_percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[
            MinValueValidator(Decimal("0.00")),
            MaxValueValidator(Decimal("100.00")),
        ],
    )
    discount_start_date = models.DateTimeField(null=True, blank=True)
    discount_end_date = models.DateTimeField(null=True, blank=True)
    exclusive_edition = models.BooleanField(default=False)
    book_photo = models.CharField(max_length=500, blank=True, default="")

    class Meta:
        db_table = "books"
        ordering = ["id"]
        indexes = [
            models.Index(fields=["title"], name="books_title_idx"),
            models.Index(fields=["genre"], name="books_genre_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="books_price_non_negative",
            ),
        ]

    @property
    def in_stock(self) -> bool:
        return self.stock > 0

    def __str__(self) -> str:
        return f"{self.title} ({self.isbn})"
