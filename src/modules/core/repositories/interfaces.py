"""Repository contract shared by the accounts, catalog, cart and order modules.

Services receive implementations through their constructors and never
touch the ORM themselves.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Iterable, Optional, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    @abstractmethod
    def get_by_id(self, id: Any) -> Optional[T]:
        """``None`` when no row has this key."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> Iterable[T]:
        """Rows matching ``filters``, given as ORM look-ups."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Insert or update ``entity`` and return it."""
