"""Admin registrations for ratings."""

from __future__ import annotations

from django.contrib import admin  # type: ignore

from .models import Rating


@admin.register(Rating)
class RatingAdmin(admin.ModelAdmin):
    list_display = ('product', 'user', 'stars', 'created_at')
    list_filter = ('stars',)
    search_fields = ('product__name', 'user__email', 'comment')
    readonly_fields = ('created_at', 'updated_at')
