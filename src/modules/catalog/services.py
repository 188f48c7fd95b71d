"""Catalog service layer (Use Cases).

Read-only use cases over the Book catalog: paginated listing, single
look-up and multi-predicate search.  Empty pages are reported as
``NoBooksFound`` rather than an empty success payload.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import structlog

from modules.catalog.exceptions import BookNotFound, NoBooksFound
from modules.core.pagination import Page, paginate

if TYPE_CHECKING:
    from modules.catalog.dtos import BookSearchDTO
    from modules.catalog.models import Book
    from modules.catalog.repositories.interfaces import IBookRepository

logger = structlog.get_logger(__name__)


class CatalogService:
    """Application service for catalog queries.

    Receives an ``IBookRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IBookRepository) -> None:
        self._repo = repository

    def list_books(self, page: int, page_size: int) -> Page[Book]:
        """Return one page of the catalog ordered by id.

        Raises:
            InvalidPageRequest: page or page_size is not positive.
            NoBooksFound: the requested page is empty.
        """
        result = paginate(self._repo.list(), page, page_size)
        if not result.items:
            raise NoBooksFound("No books found.")
        logger.info(
            "catalog.page_listed",
            page=page,
            page_size=page_size,
            total_items=result.total_items,
        )
        return result

    def get_book(self, id: int) -> Book:
        """Raises ``BookNotFound`` if the book does not exist."""
        book = self._repo.get_by_id(id)
        if not book:
            raise BookNotFound(f"Book {id} not found.")
        return book

    def search_books(self, dto: BookSearchDTO) -> List[Book]:
        """Filter, sort and paginate the catalog.

        Raises:
            InvalidPageRequest: page or page_size is not positive.
            NoBooksFound: nothing matches on the requested page.
        """
        queryset = self._repo.search(dto.filters(), dto.ordering())
        result = paginate(queryset, dto.page, dto.page_size)
        if not result.items:
            raise NoBooksFound("No books found.")
        logger.info(
            "catalog.searched",
            sort_by=dto.sort_by,
            sort_order=dto.sort_order,
            matches=result.total_items,
        )
        return result.items
