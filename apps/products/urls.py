"""URL routing for the catalog (``/api/v1/products/``).

Explicit paths come before the router so ``search/`` and the other
fixed segments are never taken for a product id.
"""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from apps.bookings.views import (
    ProductAvailabilityView,
    ProductBookableWindowsView,
    ProductReservationsView,
)

from .views import (
    CategoryViewSet,
    FeatureViewSet,
    ProductViewSet,
    SearchProductsView,
    SuggestProductsView,
)

router = DefaultRouter()
router.include_root_view = False
router.register(r"categories", CategoryViewSet, basename="category")
router.register(r"features", FeatureViewSet, basename="feature")
router.register(r"", ProductViewSet, basename="product")

urlpatterns = [
    path("search/", SearchProductsView.as_view(), name="product-search"),
    path("suggest/", SuggestProductsView.as_view(), name="product-suggest"),
    # Availability and reservations of a product
    path(
        "<int:product_id>/availability/",
        ProductAvailabilityView.as_view(),
        name="product-availability",
    ),
    path(
        "<int:product_id>/availability/bookable/",
        ProductBookableWindowsView.as_view(),
        name="product-bookable-windows",
    ),
    path(
        "<int:product_id>/reservations/",
        ProductReservationsView.as_view(),
        name="product-reservations",
    ),
    path("", include("apps.reviews.urls")),
    path("", include(router.urls)),
]
