"""Conjunctive book search predicates.

Every filter is optional; supplied filters are combined with AND.
``in_stock=False`` is not a predicate (only ``True`` narrows the result).
"""

import django_filters
from django.db.models import Q

from modules.catalog.models import Book


class BookFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")
    genre = django_filters.CharFilter(field_name="genre")
    author = django_filters.CharFilter(field_name="author")
    publisher = django_filters.CharFilter(field_name="publisher")
    language = django_filters.CharFilter(field_name="language")
    format = django_filters.CharFilter(field_name="format")
    min_price = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="price", lookup_expr="lte")
    in_stock = django_filters.BooleanFilter(method="filter_in_stock")
    in_library = django_filters.BooleanFilter(field_name="is_available_in_library")

    class Meta:
        model = Book
        fields = [
            "search",
            "genre",
            "author",
            "publisher",
            "language",
            "format",
            "min_price",
            "max_price",
            "in_stock",
            "in_library",
        ]

    def filter_search(self, queryset, name, value):
        term = value.strip()
        if not term:
            return queryset
        return queryset.filter(
            Q(title__icontains=term)
            | Q(author__icontains=term)
            | Q(isbn__icontains=term)
            | Q(description__icontains=term)
        )

    def filter_in_stock(self, queryset, name, value):
        if value:
            return queryset.filter(stock__gt=0)
        return queryset
