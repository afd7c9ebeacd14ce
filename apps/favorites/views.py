"""API views for favorites management."""

from __future__ import annotations

import logging

from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore

from .models import Favorite
from .serializers import FavoriteCreateSerializer, FavoriteSerializer

logger = logging.getLogger(__name__)


class FavoriteViewSet(
    mixins.ListModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """
    Favorites of the current user.

    Endpoints:
    - GET /api/v1/favorites/ - list favorites
    - POST /api/v1/favorites/ - add a product, adding it twice is a no-op
    - DELETE /api/v1/favorites/{product_id}/ - remove a product
    """

    serializer_class = FavoriteSerializer
    permission_classes = [permissions.IsAuthenticated]
    lookup_field = 'product_id'
    lookup_value_regex = r'\d+'

    def get_queryset(self):  # type: ignore
        """Users only see their own favorites."""
        return (
            Favorite.objects.filter(user=self.request.user)
            .select_related('product', 'product__category')
            .prefetch_related('product__features', 'product__images', 'product__policies')
        )

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = FavoriteCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = serializer.validated_data['product']

        favorite, created = Favorite.objects.get_or_create(user=request.user, product=product)
        if created:
            logger.info("User %s added product %s to favorites", request.user.pk, product.pk)
        return Response(
            FavoriteSerializer(favorite).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )

    def perform_destroy(self, instance):  # type: ignore
        logger.info("User %s removed product %s from favorites", instance.user_id, instance.product_id)
        instance.delete()
