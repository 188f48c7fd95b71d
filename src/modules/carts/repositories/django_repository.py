"""Django ORM implementation of the Cart repository."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

import structlog
from django.db import transaction
from django.db.models import F

from modules.carts.models import CartEntry
from modules.carts.repositories.interfaces import ICartRepository

logger = structlog.get_logger(__name__)


class CartDjangoRepository(ICartRepository):
    """Concrete Cart repository backed by Django ORM."""

    def get_by_id(self, id: Any) -> Optional[CartEntry]:
        return CartEntry.objects.select_related("book").filter(id=id).first()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[CartEntry]:
        """List entries; e.g. ``{"user_id": ...}`` for a single cart."""
        queryset = CartEntry.objects.select_related("book")
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    @transaction.atomic
    def save(self, entity: CartEntry) -> CartEntry:
        entity.save()
        return entity

    def get_for_user(self, user_id: str, book_id: int) -> Optional[CartEntry]:
        return (
            CartEntry.objects.select_related("book")
            .filter(user_id=user_id, book_id=book_id)
            .first()
        )

    @transaction.atomic
    def add(self, user_id: str, book_id: int, quantity: int) -> CartEntry:
        """Upsert under a row lock so concurrent adds accumulate."""
        entry = (
            CartEntry.objects.select_for_update()
            .filter(user_id=user_id, book_id=book_id)
            .first()
        )
        if entry is None:
            entry = CartEntry.objects.create(
                user_id=user_id, book_id=book_id, quantity=quantity
            )
        else:
            entry.quantity = F("quantity") + quantity
            entry.save(update_fields=["quantity"])
            entry.refresh_from_db()
        logger.info(
            "cart.entry_added",
            user_id=str(user_id),
            book_id=book_id,
            quantity=entry.quantity,
        )
        return entry

    @transaction.atomic
    def remove_books(self, user_id: str, book_ids: Iterable[int]) -> int:
        removed, _ = CartEntry.objects.filter(
            user_id=user_id, book_id__in=set(book_ids)
        ).delete()
        logger.info("cart.entries_removed", user_id=str(user_id), removed=removed)
        return removed
