"""User repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.accounts.models import User


class IUserRepository(IRepository["User"]):
    @abstractmethod
    def get_by_id(self, id: Any) -> Optional[User]:
        """Retrieve a user; ``None`` for unknown or malformed ids."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[User]:
        """List users with optional filters."""
