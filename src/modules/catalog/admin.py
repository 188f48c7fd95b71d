from django.contrib import admin

from modules.catalog.models import Book


@admin.register(Book)
class BookAdmin(admin.ModelAdmin):
    list_display = ("title", "author", "isbn", "price", "stock", "on_sale")
    list_filter = ("genre", "language", "format", "on_sale", "exclusive_edition")
    search_fields = ("title", "author", "isbn")
