"""Serializers for user-related API endpoints."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Main user serializer."""

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "first_name",
            "last_name",
            "role",
            "created_at",
        ]
        read_only_fields = ["id", "email", "role", "created_at"]


class RoleUpdateSerializer(serializers.ModelSerializer):
    """Admin-only role change."""

    class Meta:
        model = User
        fields = ["role"]
