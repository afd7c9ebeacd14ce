"""Admin registrations for the catalog."""

from __future__ import annotations

from django.contrib import admin  # type: ignore

from .models import AvailabilityWindow, Category, Feature, Policy, Product, ProductImage


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("title",)
    search_fields = ("title",)


@admin.register(Feature)
class FeatureAdmin(admin.ModelAdmin):
    list_display = ("name", "icon")
    search_fields = ("name",)


class ProductImageInline(admin.TabularInline):
    model = ProductImage
    extra = 0
    fields = ("path", "order")


class PolicyInline(admin.TabularInline):
    model = Policy
    extra = 0
    fields = ("title", "description")


class AvailabilityWindowInline(admin.TabularInline):
    model = AvailabilityWindow
    extra = 0
    fields = ("start_date", "end_date", "status")


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "created_at")
    list_filter = ("category",)
    search_fields = ("name", "description")
    inlines = (ProductImageInline, PolicyInline, AvailabilityWindowInline)
    filter_horizontal = ("features",)
    readonly_fields = ("created_at", "updated_at")


@admin.register(AvailabilityWindow)
class AvailabilityWindowAdmin(admin.ModelAdmin):
    list_display = ("product", "start_date", "end_date", "status")
    list_filter = ("status",)
    search_fields = ("product__name",)
