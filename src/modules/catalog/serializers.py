"""Catalog DRF serializers.

Output field names follow the public JSON contract (camelCase).
"""

from __future__ import annotations

from django.conf import settings
from rest_framework import serializers

from modules.catalog.models import Book


class BookSerializer(serializers.ModelSerializer):
    bookId = serializers.CharField(source="id", read_only=True)
    bookPhoto = serializers.CharField(source="book_photo", read_only=True)
    publicationDate = serializers.DateField(source="publication_date", read_only=True)
    isAvailableInLibrary = serializers.BooleanField(
        source="is_available_in_library", read_only=True
    )
    onSale = serializers.BooleanField(source="on_sale", read_only=True)
    discountPercentage = serializers.DecimalField(
        source="discount_percentage",
        max_digits=5,
        decimal_places=2,
        read_only=True,
    )
    discountStartDate = serializers.DateTimeField(
        source="discount_start_date", read_only=True
    )
    discountEndDate = serializers.DateTimeField(
        source="discount_end_date", read_only=True
    )
    exclusiveEdition = serializers.BooleanField(
        source="exclusive_edition", read_only=True
    )
    addedDate = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Book
        fields = [
            "bookId",
            "title",
            "isbn",
            "description",
            "author",
            "genre",
            "language",
            "bookPhoto",
            "format",
            "publisher",
            "publicationDate",
            "price",
            "stock",
            "isAvailableInLibrary",
            "onSale",
            "discountPercentage",
            "discountStartDate",
            "discountEndDate",
            "exclusiveEdition",
            "addedDate",
        ]
        read_only_fields = fields


class PageQuerySerializer(serializers.Serializer):
    """Validates ``page``/``pageSize`` types; positivity is a service rule."""

    page = serializers.IntegerField(required=False, default=1)
    pageSize = serializers.IntegerField(
        required=False, default=lambda: settings.CATALOG_PAGE_SIZE
    )


class BookSearchQuerySerializer(PageQuerySerializer):
    search = serializers.CharField(required=False, allow_blank=True)
    genre = serializers.CharField(required=False, allow_blank=True)
    author = serializers.CharField(required=False, allow_blank=True)
    publisher = serializers.CharField(required=False, allow_blank=True)
    language = serializers.CharField(required=False, allow_blank=True)
    format = serializers.CharField(required=False, allow_blank=True)
    minPrice = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    maxPrice = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    inStock = serializers.BooleanField(required=False, allow_null=True, default=None)
    inLibrary = serializers.BooleanField(required=False, allow_null=True, default=None)
    sortBy = serializers.CharField(required=False, default="title", allow_blank=True)
    sortOrder = serializers.CharField(required=False, default="asc", allow_blank=True)
