from django.contrib import admin

from modules.orders.models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ("book", "quantity", "unit_price", "subtotal")
    can_delete = False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = (
        "claim_code",
        "user",
        "status",
        "total_amount",
        "discount_applied",
        "order_date",
        "completed_at",
    )
    list_filter = ("status",)
    search_fields = ("claim_code", "user__username", "user__email")
    readonly_fields = ("claim_code", "completed_at")
    inlines = [OrderItemInline]
