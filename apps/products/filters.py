"""FilterSet definitions for product listing and search."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Count, Q  # type: ignore

from .models import Product


def text_query(queryset, value: str):
    """Case-insensitive match on name, description and category title."""
    value = (value or "").strip()
    if not value:
        return queryset
    return queryset.filter(
        Q(name__icontains=value) | Q(description__icontains=value) | Q(category__title__icontains=value)
    )


class ProductFilterSet(django_filters.FilterSet):
    """FilterSet for Product used by the list and search endpoints."""

    category = django_filters.NumberFilter(field_name="category_id", lookup_expr="exact")
    query = django_filters.CharFilter(method="filter_query")

    # CSV of feature ids, requires all selected features
    features = django_filters.CharFilter(method="filter_features")

    class Meta:
        model = Product
        fields = ["category"]

    def filter_query(self, queryset, name, value):  # type: ignore
        return text_query(queryset, value)

    def filter_features(self, queryset, name, value):  # type: ignore
        if not value:
            return queryset
        try:
            ids = [int(x) for x in str(value).replace(" ", "").split(",") if x]
        except ValueError:
            return queryset
        if not ids:
            return queryset
        return (
            queryset.filter(features__id__in=ids)
            .annotate(matched_features=Count("features", filter=Q(features__id__in=ids), distinct=True))
            .filter(matched_features=len(ids))
            .distinct()
        )
