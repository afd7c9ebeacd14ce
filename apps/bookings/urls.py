"""URL routing for reservations (``/api/v1/reservations/``).

Product-scoped availability and reservation listings are routed from
``apps.products.urls``.
"""

from __future__ import annotations

from rest_framework.routers import DefaultRouter  # type: ignore

from .views import ReservationViewSet

router = DefaultRouter()
router.include_root_view = False
router.register(r"", ReservationViewSet, basename="reservation")

urlpatterns = router.urls
