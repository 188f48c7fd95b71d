"""Cart service layer (Use Cases)."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import structlog

from modules.carts.exceptions import CartBookNotFound, CartEntryNotFound

if TYPE_CHECKING:
    from modules.carts.dtos import AddToCartDTO
    from modules.carts.models import CartEntry
    from modules.carts.repositories.interfaces import ICartRepository
    from modules.catalog.repositories.interfaces import IBookRepository

logger = structlog.get_logger(__name__)


class CartService:
    """Application service for the per-user cart."""

    def __init__(
        self,
        cart_repository: ICartRepository,
        book_repository: IBookRepository,
    ) -> None:
        self._cart_repo = cart_repository
        self._book_repo = book_repository

    def get_cart(self, user_id: str) -> List[CartEntry]:
        return self._cart_repo.list({"user_id": user_id})

    def add_to_cart(self, dto: AddToCartDTO) -> CartEntry:
        """Raises ``CartBookNotFound`` when the book is not in the catalog."""
        if not self._book_repo.get_by_id(dto.book_id):
            raise CartBookNotFound(f"Book {dto.book_id} not found.")
        return self._cart_repo.add(dto.user_id, dto.book_id, dto.quantity)

    def remove_from_cart(self, user_id: str, book_id: int) -> None:
        """Raises ``CartEntryNotFound`` when the book is not in the cart."""
        if not self._cart_repo.get_for_user(user_id, book_id):
            raise CartEntryNotFound(f"Book {book_id} is not in the cart.")
        self._cart_repo.remove_books(user_id, [book_id])
