"""Serializers for the favorites domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.products.models import Product
from apps.products.serializers import ProductSerializer

from .models import Favorite


class FavoriteCreateSerializer(serializers.Serializer):
    """Serializer for adding a product to favorites."""

    product = serializers.PrimaryKeyRelatedField(queryset=Product.objects.all())


class FavoriteSerializer(serializers.ModelSerializer):
    """Serializer for listing favorites."""

    product = ProductSerializer(read_only=True)

    class Meta:
        model = Favorite
        fields = ['id', 'product', 'created_at']
