"""Admin registrations for favorites."""

from __future__ import annotations

from django.contrib import admin  # type: ignore

from .models import Favorite


@admin.register(Favorite)
class FavoriteAdmin(admin.ModelAdmin):
    list_display = ('user', 'product', 'created_at')
    search_fields = ('user__email', 'product__name')
