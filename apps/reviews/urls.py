"""URL routing for product ratings, mounted under a product."""

from django.urls import path  # type: ignore

from .views import CanRateView, ProductRatingsView

urlpatterns = [
    path('<int:product_id>/ratings/', ProductRatingsView.as_view(), name='product-ratings'),
    path('<int:product_id>/ratings/can-rate/', CanRateView.as_view(), name='product-can-rate'),
]
