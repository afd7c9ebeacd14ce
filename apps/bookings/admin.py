"""Admin registration for reservations."""

from __future__ import annotations

from django.contrib import admin

from .models import Reservation


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "product",
        "user",
        "status",
        "start_date",
        "end_date",
        "created_at",
    )
    list_filter = ("status", "start_date", "end_date")
    search_fields = ("product__name", "user__email")
    readonly_fields = (
        "created_at",
        "updated_at",
        "confirmed_at",
        "cancelled_at",
    )
