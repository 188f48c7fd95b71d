"""Book repository interface.

Extends ``IRepository[Book]`` with the filtered search used by the
catalog endpoints and the bulk look-ups used by the order workflow.
"""

from __future__ import annotations

from abc import abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Set

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.catalog.models import Book


class IBookRepository(IRepository["Book"]):
    """Repository contract for the Book catalog."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> "QuerySet[Book]":
        """List books ordered by id."""

    @abstractmethod
    def search(
        self, filters: Dict[str, Any], ordering: List[str]
    ) -> "QuerySet[Book]":
        """Apply conjunctive search predicates and ordering."""

    @abstractmethod
    def existing_ids(self, ids: Iterable[int]) -> Set[int]:
        """Return the subset of ``ids`` that exist in the catalog."""

    @abstractmethod
    def prices_for(self, ids: Iterable[int]) -> Dict[int, Decimal]:
        """Return the current catalog price of each existing book."""
