"""Cart repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.carts.models import CartEntry


class ICartRepository(IRepository["CartEntry"]):
    """Repository contract for per-user cart entries."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[CartEntry]:
        """List cart entries with their books."""

    @abstractmethod
    def get_for_user(self, user_id: str, book_id: int) -> Optional[CartEntry]:
        """Return the caller's entry for ``book_id`` (``None`` if absent)."""

    @abstractmethod
    def add(self, user_id: str, book_id: int, quantity: int) -> CartEntry:
        """Create the entry or increment its quantity."""

    @abstractmethod
    def remove_books(self, user_id: str, book_ids: Iterable[int]) -> int:
        """Delete the caller's entries for ``book_ids``; returns rows removed."""
