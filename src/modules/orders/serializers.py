"""Order DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.  Field names are camelCase on the wire.
"""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from modules.orders.models import Order, OrderItem

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateOrderItemSerializer(serializers.Serializer):
    """Validates a single item in an order creation request.

    ``bookId`` is range-checked by the service so that a bad id rejects
    the whole order with the order-specific message.
    """

    bookId = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1)
    unitPrice = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal("0")
    )


class CreateOrderSerializer(serializers.Serializer):
    items = CreateOrderItemSerializer(many=True, allow_empty=True)


class CompleteOrderSerializer(serializers.Serializer):
    # Any length; codes that match no order are answered with 404.
    claimCode = serializers.CharField()


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class OrderItemSerializer(serializers.ModelSerializer):
    """Read serializer for order items with the unit price snapshot."""

    orderItemId = serializers.IntegerField(source="id", read_only=True)
    bookId = serializers.IntegerField(source="book_id", read_only=True)
    unitPrice = serializers.DecimalField(
        source="unit_price", max_digits=10, decimal_places=2, read_only=True
    )

    class Meta:
        model = OrderItem
        fields = ["orderItemId", "bookId", "quantity", "unitPrice", "subtotal"]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders with nested items."""

    orderId = serializers.IntegerField(source="id", read_only=True)
    userId = serializers.CharField(source="user_id", read_only=True)
    orderDate = serializers.DateTimeField(source="order_date", read_only=True)
    completedAt = serializers.DateTimeField(source="completed_at", read_only=True)
    claimCode = serializers.CharField(source="claim_code", read_only=True)
    totalAmount = serializers.DecimalField(
        source="total_amount", max_digits=12, decimal_places=2, read_only=True
    )
    discountApplied = serializers.DecimalField(
        source="discount_applied", max_digits=12, decimal_places=2, read_only=True
    )
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "orderId",
            "userId",
            "orderDate",
            "completedAt",
            "status",
            "claimCode",
            "totalAmount",
            "discountApplied",
            "items",
        ]
        read_only_fields = fields


class NotificationSerializer(serializers.Serializer):
    """Renders ``NotificationDTO`` instances."""

    type = serializers.CharField()
    content = serializers.CharField()
    id = serializers.CharField()
    timestamp = serializers.DateTimeField()
    title = serializers.CharField()
    description = serializers.CharField()
