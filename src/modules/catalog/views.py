"""Catalog API views.

Public (anonymous) read endpoints over the book catalog.  Domain
exceptions are caught and translated into envelope responses; the view
never swallows generic exceptions.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.catalog.dtos import BookSearchDTO
from modules.catalog.exceptions import BookNotFound, NoBooksFound
from modules.catalog.repositories.django_repository import BookDjangoRepository
from modules.catalog.serializers import (
    BookSearchQuerySerializer,
    BookSerializer,
    PageQuerySerializer,
)
from modules.catalog.services import CatalogService
from modules.core.exceptions import InvalidPageRequest
from modules.core.responses import envelope


def _blank_to_none(value):
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class BookViewSet(GenericViewSet):
    """Catalog browsing: pagination, look-up by id and search."""

    permission_classes = [AllowAny]
    serializer_class = BookSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CatalogService(repository=BookDjangoRepository())

    @action(detail=False, methods=["get"], url_path="BookPagination")
    def book_pagination(self, request: Request) -> Response:
        """GET /api/Book/BookPagination?page=&pageSize="""
        query = PageQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        try:
            page = self._service.list_books(
                query.validated_data["page"], query.validated_data["pageSize"]
            )
        except InvalidPageRequest as exc:
            return envelope(str(exc), status_code=status.HTTP_400_BAD_REQUEST)
        except NoBooksFound as exc:
            return envelope(str(exc), status_code=status.HTTP_404_NOT_FOUND)

        return envelope(
            "Books fetched successfully.",
            {
                "currentPage": page.current_page,
                "pageSize": page.page_size,
                "totalItems": page.total_items,
                "totalPages": page.total_pages,
                "items": BookSerializer(page.items, many=True).data,
            },
        )

    @action(
        detail=False,
        methods=["get"],
        url_path=r"GetBookById/(?P<book_id>\d+)",
    )
    def get_book_by_id(self, request: Request, book_id: str) -> Response:
        """GET /api/Book/GetBookById/{id}"""
        try:
            book = self._service.get_book(int(book_id))
        except BookNotFound:
            return envelope("Book not found.", status_code=status.HTTP_404_NOT_FOUND)
        return envelope("Book fetched successfully.", BookSerializer(book).data)

    @action(detail=False, methods=["get"], url_path="SearchBooks")
    def search_books(self, request: Request) -> Response:
        """GET /api/Book/SearchBooks

        All predicates are optional and combined with AND.
        """
        query = BookSearchQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        data = query.validated_data

        dto = BookSearchDTO(
            search=_blank_to_none(data.get("search")),
            genre=_blank_to_none(data.get("genre")),
            author=_blank_to_none(data.get("author")),
            publisher=_blank_to_none(data.get("publisher")),
            language=_blank_to_none(data.get("language")),
            format=_blank_to_none(data.get("format")),
            min_price=data.get("minPrice"),
            max_price=data.get("maxPrice"),
            in_stock=data.get("inStock"),
            in_library=data.get("inLibrary"),
            sort_by=data["sortBy"],
            sort_order=data["sortOrder"],
            page=data["page"],
            page_size=data["pageSize"],
        )

        try:
            books = self._service.search_books(dto)
        except InvalidPageRequest as exc:
            return envelope(str(exc), status_code=status.HTTP_400_BAD_REQUEST)
        except NoBooksFound as exc:
            return envelope(str(exc), status_code=status.HTTP_404_NOT_FOUND)

        return envelope(
            "Books fetched successfully.", BookSerializer(books, many=True).data
        )
