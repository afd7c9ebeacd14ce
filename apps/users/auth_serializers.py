"""Serializers for authentication flows (register, login)."""

from __future__ import annotations

from typing import Any

from django.contrib.auth import get_user_model  # type: ignore
from django.db import transaction  # type: ignore
from rest_framework import serializers  # type: ignore
from rest_framework_simplejwt.tokens import RefreshToken  # type: ignore

User = get_user_model()


class RegisterSerializer(serializers.Serializer):
    first_name = serializers.CharField(max_length=150)
    last_name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(min_length=8, write_only=True)

    def validate_email(self, value: str) -> str:
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("A user with this email already exists.")
        return value

    @transaction.atomic
    def create(self, validated_data: dict[str, Any]):  # type: ignore
        password = validated_data.pop("password")
        # New accounts are always clients; admins promote them later.
        return User.objects.create_user(password=password, **validated_data)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        try:
            user = User.objects.get(email__iexact=attrs.get("email", ""))
        except User.DoesNotExist:
            raise serializers.ValidationError({"email": "Invalid email or password."})

        if not user.is_active or not user.check_password(attrs.get("password", "")):
            raise serializers.ValidationError({"email": "Invalid email or password."})

        attrs["user"] = user
        return attrs


class RoleClaimsRefreshToken(RefreshToken):
    """Refresh token whose access tokens carry ``role`` and ``email`` claims."""

    @classmethod
    def for_user(cls, user):  # type: ignore
        token = super().for_user(user)
        token["role"] = "admin" if user.is_admin() else user.role
        token["email"] = user.email
        return token
