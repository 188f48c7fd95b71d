"""Order repository interface.

Extends ``IRepository[Order]`` with methods required by the Order
aggregate: atomic creation with items, claim-code look-ups, row locks for
status transitions and the history queries behind discounts and the
notification feed.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    The Order aggregate includes its OrderItem children.  Mutations must
    be atomic.
    """

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order with its items atomically.

        ``data`` must include ``user_id``, ``items`` (list of dicts with
        ``book_id``, ``quantity``, ``unit_price``), ``total_amount`` and
        ``discount_applied``.
        """

    @abstractmethod
    def get_by_id(self, id: Any) -> Optional[Order]:
        """Retrieve an order with prefetched items."""

    @abstractmethod
    def get_by_claim_code(self, claim_code: str) -> Optional[Order]:
        """Retrieve an order by claim code with prefetched items."""

    @abstractmethod
    def get_for_update(self, id: Any) -> Optional[Order]:
        """Retrieve an order by id under a row-level lock."""

    @abstractmethod
    def get_by_claim_code_for_update(self, claim_code: str) -> Optional[Order]:
        """Retrieve an order by claim code under a row-level lock."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """List orders with optional filters and prefetched items."""

    @abstractmethod
    def count_completed_for_user(self, user_id: str) -> int:
        """Number of the user's orders in ``Completed`` status."""

    @abstractmethod
    def list_completed_since(
        self, since: datetime, exclude_user_id: str
    ) -> List[Order]:
        """Completed orders finished after ``since`` by other users."""
