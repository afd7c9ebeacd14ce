"""Serializers for ratings.

The rating user and product come from the request and the URL, never
from the body.
"""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Rating


class RatingSerializer(serializers.ModelSerializer):
    """Read serializer for ratings."""

    user_name = serializers.ReadOnlyField(source='user.display_name')

    class Meta:
        model = Rating
        fields = ['id', 'user', 'user_name', 'product', 'stars', 'comment', 'created_at', 'updated_at']
        read_only_fields = fields


class RatingCreateSerializer(serializers.Serializer):
    stars = serializers.IntegerField()
    comment = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_stars(self, value: int) -> int:  # type: ignore
        if value < 1 or value > 5:
            raise serializers.ValidationError('Stars must be between 1 and 5.')
        return value
