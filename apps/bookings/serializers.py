"""Serializers for the booking domain.

Reads render domain objects (``Reservation`` aggregates and availability
snapshots); writes only shape input, every rule is checked by the
command handlers.
"""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.products.models import AvailabilityWindow
from shared.domain.value_objects import DateInterval


class ReservationSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    product = serializers.IntegerField(source="product_id", read_only=True)
    user = serializers.IntegerField(source="user_id", read_only=True)
    start_date = serializers.DateField(source="period.start", read_only=True)
    end_date = serializers.DateField(source="period.end", read_only=True)
    nights = serializers.IntegerField(read_only=True)
    status = serializers.CharField(source="status.value", read_only=True)
    notes = serializers.CharField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
    confirmed_at = serializers.DateTimeField(read_only=True)
    cancelled_at = serializers.DateTimeField(read_only=True)


class ProductReservationSerializer(serializers.Serializer):
    """Occupied dates of a product, as shown on the public calendar."""

    id = serializers.IntegerField(read_only=True)
    start_date = serializers.DateField(source="period.start", read_only=True)
    end_date = serializers.DateField(source="period.end", read_only=True)
    status = serializers.CharField(source="status.value", read_only=True)


class ReservationCreateSerializer(serializers.Serializer):
    """Reservation request.

    Dates stay strings here: parsing them is part of the create command so
    malformed input is reported as ``invalid_range``.
    """

    product = serializers.IntegerField()
    start_date = serializers.CharField()
    end_date = serializers.CharField()
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class ReservationCancelSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default="", max_length=255)


class AvailabilitySnapshotSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    start_date = serializers.DateField(source="period.start", read_only=True)
    end_date = serializers.DateField(source="period.end", read_only=True)
    status = serializers.CharField(source="status.value", read_only=True)


class AvailabilityWindowSerializer(serializers.ModelSerializer):
    """Admin input for a new availability window."""

    class Meta:
        model = AvailabilityWindow
        fields = ["id", "product", "start_date", "end_date", "status", "created_at"]
        read_only_fields = ["id", "product", "created_at"]

    def validate(self, attrs):  # type: ignore
        # Raises InvalidRangeError for an inverted range.
        DateInterval(attrs["start_date"], attrs["end_date"])
        return attrs
