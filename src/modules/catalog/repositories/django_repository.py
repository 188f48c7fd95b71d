"""Django ORM implementation of the Book repository.

Error handling follows the Null Object pattern: ``get_by_id`` returns
``None`` instead of raising, the Service Layer decides how to translate a
missing entity into an API response.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Set

import structlog
from django.db import transaction
from django.db.models import QuerySet

from modules.catalog.filters import BookFilter
from modules.catalog.models import Book
from modules.catalog.repositories.interfaces import IBookRepository

logger = structlog.get_logger(__name__)


class BookDjangoRepository(IBookRepository):
    """Concrete Book repository backed by Django ORM."""

    def get_by_id(self, id: Any) -> Optional[Book]:
        """Retrieve a book by primary key; ``None`` for unknown or invalid IDs."""
        try:
            return Book.objects.filter(id=id).first()
        except (TypeError, ValueError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet[Book]:
        queryset = Book.objects.order_by("id")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    def search(self, filters: Dict[str, Any], ordering: List[str]) -> QuerySet[Book]:
        """Filter through ``BookFilter``; ``None`` values are dropped."""
        data = {key: value for key, value in filters.items() if value is not None}
        queryset = BookFilter(data=data, queryset=Book.objects.all()).qs
        return queryset.order_by(*ordering)

    @transaction.atomic
    def save(self, entity: Book) -> Book:
        entity.save()
        logger.info("book.saved", book_id=entity.id, isbn=entity.isbn)
        return entity

    def existing_ids(self, ids: Iterable[int]) -> Set[int]:
        return set(Book.objects.filter(id__in=set(ids)).values_list("id", flat=True))

    def prices_for(self, ids: Iterable[int]) -> Dict[int, Decimal]:
        return dict(Book.objects.filter(id__in=set(ids)).values_list("id", "price"))
