"""Cart DRF serializers."""

from __future__ import annotations

from rest_framework import serializers

from modules.carts.models import CartEntry


class AddToCartSerializer(serializers.Serializer):
    bookId = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1, required=False, default=1)


class CartEntrySerializer(serializers.ModelSerializer):
    cartId = serializers.IntegerField(source="id", read_only=True)
    bookId = serializers.IntegerField(source="book_id", read_only=True)
    title = serializers.CharField(source="book.title", read_only=True)
    price = serializers.DecimalField(
        source="book.price", max_digits=10, decimal_places=2, read_only=True
    )
    addedAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = CartEntry
        fields = ["cartId", "bookId", "title", "price", "quantity", "addedAt"]
        read_only_fields = fields
