"""Bookstore user model.

The user identifier shared with clients (JWT ``userId`` claim, order
ownership) is the UUIDv7 primary key rendered as a string.

``created_at`` is nullable on purpose: accounts imported from the legacy
identity store may lack it, and the order notification feed refuses to
answer for such accounts.
"""

from __future__ import annotations

import uuid6
from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils import timezone


class User(AbstractUser):
    id = models.UUIDField(
        primary_key=True,
        default=uuid6.uuid7,
        editable=False,
    )
    full_name = models.CharField(max_length=255, blank=True, default="")
    created_at = models.DateTimeField(null=True, blank=True, default=timezone.now)

    class Meta:
        db_table = "users"
        ordering = ["username"]

    @property
    def display_name(self) -> str:
        return self.full_name or self.username

    def __str__(self) -> str:
        return self.display_name
