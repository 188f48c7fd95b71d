"""Account DRF serializers (read-only profile)."""

from __future__ import annotations

from rest_framework import serializers

from modules.accounts.models import User


class ProfileSerializer(serializers.ModelSerializer):
    userId = serializers.CharField(source="id", read_only=True)
    fullName = serializers.CharField(source="display_name", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = User
        fields = ["userId", "username", "email", "fullName", "createdAt"]
        read_only_fields = fields
