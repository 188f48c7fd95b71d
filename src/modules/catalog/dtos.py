"""Catalog DTOs for the Service Layer.

Framework-agnostic, immutable (``frozen=True``) Pydantic v2 models.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

SORT_FIELDS = {
    "title": "title",
    "price": "price",
    "publicationdate": "publication_date",
}
DEFAULT_SORT = "title"


class BookSearchDTO(BaseModel):
    """Search request: optional predicates, sort and page.

    ``sort_by`` is matched case-insensitively; unknown keys fall back to
    ``title``.  ``sort_order`` is ``desc`` or anything else (ascending).
    """

    model_config = ConfigDict(frozen=True)

    search: Optional[str] = None
    genre: Optional[str] = None
    author: Optional[str] = None
    publisher: Optional[str] = None
    language: Optional[str] = None
    format: Optional[str] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    in_stock: Optional[bool] = None
    in_library: Optional[bool] = None
    sort_by: str = DEFAULT_SORT
    sort_order: str = "asc"
    page: int = 1
    page_size: int = 10

    @field_validator("sort_by", "sort_order", mode="before")
    @classmethod
    def normalise_case(cls, v: Optional[str]) -> str:
        return (v or "").strip().lower()

    @property
    def descending(self) -> bool:
        return self.sort_order == "desc"

    def ordering(self) -> list[str]:
        field = SORT_FIELDS.get(self.sort_by, SORT_FIELDS[DEFAULT_SORT])
        prefix = "-" if self.descending else ""
        return [f"{prefix}{field}", f"{prefix}id"]

    def filters(self) -> dict:
        return self.model_dump(
            include={
                "search",
                "genre",
                "author",
                "publisher",
                "language",
                "format",
                "min_price",
                "max_price",
                "in_stock",
                "in_library",
            }
        )
