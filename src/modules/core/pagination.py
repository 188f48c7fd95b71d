"""Offset pagination helper shared by list endpoints.

Pages are 1-based.  A page past the end is returned empty; deciding
whether that is an error belongs to the caller.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Generic, List, Sequence, TypeVar

from django.db.models import QuerySet

from modules.core.exceptions import InvalidPageRequest

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    current_page: int
    page_size: int
    total_items: int
    items: List[T] = field(default_factory=list)

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.page_size)


def validate_page_request(page: int, page_size: int) -> None:
    if page <= 0 or page_size <= 0:
        raise InvalidPageRequest("Page and PageSize must be greater than 0.")


def paginate(queryset: Sequence[Any], page: int, page_size: int) -> Page:
    """Slice ``queryset`` into the requested page.

    Works with QuerySets (``count()`` + SQL ``LIMIT/OFFSET``) and with
    plain sequences.

    Raises:
        InvalidPageRequest: ``page`` or ``page_size`` is not positive.
    """
    validate_page_request(page, page_size)
    total = queryset.count() if isinstance(queryset, QuerySet) else len(queryset)
    offset = (page - 1) * page_size
    return Page(
        current_page=page,
        page_size=page_size,
        total_items=total,
        items=list(queryset[offset : offset + page_size]),
    )
