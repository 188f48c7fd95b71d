"""Unit tests for ``CatalogService`` and the book search predicates.

Covers:
- Pagination: positive page/pageSize, empty page is an error.
- Search: substring match, conjunctive filters, sort key and direction.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from modules.catalog.dtos import BookSearchDTO
from modules.catalog.exceptions import BookNotFound, NoBooksFound
from modules.catalog.models import Book
from modules.catalog.repositories.django_repository import BookDjangoRepository
from modules.catalog.services import CatalogService
from modules.core.exceptions import InvalidPageRequest

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def service():
    return CatalogService(repository=BookDjangoRepository())


def _book(title, isbn, **extra):
    defaults = {
        "author": "Someone",
        "price": Decimal("10.00"),
        "stock": 1,
    }
    defaults.update(extra)
    return Book.objects.create(title=title, isbn=isbn, **defaults)


@pytest.fixture()
def go_and_rust():
    return (
        _book("Go", "111", genre="Programming", price=Decimal("30.00"),
              publication_date=date(2015, 10, 26), stock=3),
        _book("Rust", "222", genre="Programming", price=Decimal("45.00"),
              publication_date=date(2019, 8, 12), stock=0),
    )


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------


class TestListBooks:
    def test_returns_requested_page(self, service):
        for i in range(5):
            _book(f"Book {i}", f"isbn-{i}")

        page = service.list_books(page=2, page_size=2)

        assert page.current_page == 2
        assert page.total_items == 5
        assert page.total_pages == 3
        assert [b.title for b in page.items] == ["Book 2", "Book 3"]

    @pytest.mark.parametrize("page,page_size", [(0, 10), (1, 0), (-1, 5)])
    def test_non_positive_values_are_rejected(self, service, page, page_size):
        with pytest.raises(InvalidPageRequest):
            service.list_books(page=page, page_size=page_size)

    def test_page_past_the_end_is_an_error(self, service, go_and_rust):
        with pytest.raises(NoBooksFound):
            service.list_books(page=5, page_size=10)

    def test_get_book(self, service, go_and_rust):
        assert service.get_book(go_and_rust[0].id).title == "Go"

    def test_get_missing_book(self, service):
        with pytest.raises(BookNotFound):
            service.get_book(12345)


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


class TestSearchBooks:
    def test_search_matches_single_title(self, service, go_and_rust):
        books = service.search_books(BookSearchDTO(search="Go"))
        assert [b.title for b in books] == ["Go"]

    def test_search_covers_author_and_isbn(self, service):
        _book("Dune", "9780441172719", author="Frank Herbert")
        assert len(service.search_books(BookSearchDTO(search="herbert"))) == 1
        assert len(service.search_books(BookSearchDTO(search="0441"))) == 1

    def test_filters_are_conjunctive(self, service, go_and_rust):
        _book("Cooking", "333", genre="Food", stock=5)

        books = service.search_books(BookSearchDTO(genre="Programming", in_stock=True))

        assert [b.title for b in books] == ["Go"]

    def test_in_stock_false_does_not_narrow(self, service, go_and_rust):
        books = service.search_books(BookSearchDTO(in_stock=False))
        assert len(books) == 2

    def test_price_range(self, service, go_and_rust):
        books = service.search_books(
            BookSearchDTO(min_price=Decimal("40"), max_price=Decimal("50"))
        )
        assert [b.title for b in books] == ["Rust"]

    def test_library_availability(self, service, go_and_rust):
        Book.objects.filter(title="Rust").update(is_available_in_library=True)
        books = service.search_books(BookSearchDTO(in_library=True))
        assert [b.title for b in books] == ["Rust"]

    def test_sort_by_price_descending(self, service, go_and_rust):
        books = service.search_books(BookSearchDTO(sort_by="Price", sort_order="DESC"))
        assert [b.title for b in books] == ["Rust", "Go"]

    def test_sort_by_publication_date(self, service, go_and_rust):
        books = service.search_books(
            BookSearchDTO(sort_by="publicationDate", sort_order="desc")
        )
        assert [b.title for b in books] == ["Rust", "Go"]

    def test_unknown_sort_key_falls_back_to_title(self, service, go_and_rust):
        books = service.search_books(BookSearchDTO(sort_by="stock"))
        assert [b.title for b in books] == ["Go", "Rust"]

    def test_no_match_is_an_error(self, service, go_and_rust):
        with pytest.raises(NoBooksFound):
            service.search_books(BookSearchDTO(search="Haskell"))

    def test_search_pages(self, service, go_and_rust):
        books = service.search_books(BookSearchDTO(page=2, page_size=1))
        assert [b.title for b in books] == ["Rust"]
