"""URL declarations for the users app (admin user management and ``me``)."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter  # type: ignore

from .views import UserViewSet

router = DefaultRouter(trailing_slash=True)
router.include_root_view = False
router.register(r"", UserViewSet, basename="user")

urlpatterns = router.urls
