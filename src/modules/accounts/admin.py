from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from modules.accounts.models import User


@admin.register(User)
class BookstoreUserAdmin(UserAdmin):
    list_display = ("username", "email", "full_name", "created_at", "is_staff")
    fieldsets = UserAdmin.fieldsets + (
        ("Bookstore", {"fields": ("full_name", "created_at")}),
    )
