"""API views for product ratings."""

from __future__ import annotations

from rest_framework import permissions, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.products.models import Product
from apps.users.identity import resolve_identity
from shared.domain.errors import NotFoundError, UnauthenticatedError

from .models import Rating
from .serializers import RatingCreateSerializer, RatingSerializer
from .services import can_rate, rate_product


def _require_product(product_id: int) -> None:
    if not Product.objects.filter(pk=product_id).exists():
        raise NotFoundError(f"Product {product_id} not found.")


class ProductRatingsView(APIView):
    """Ratings of a product; guests with a finished stay may rate."""

    permission_classes = [permissions.AllowAny]

    def get(self, request, product_id: int):  # type: ignore
        _require_product(product_id)
        ratings = Rating.objects.filter(product_id=product_id).select_related('user')
        return Response(RatingSerializer(ratings, many=True).data)

    def post(self, request, product_id: int):  # type: ignore
        identity = resolve_identity(request)
        if identity is None:
            raise UnauthenticatedError()
        _require_product(product_id)

        serializer = RatingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        rating, created = rate_product(
            identity,
            product_id,
            serializer.validated_data['stars'],
            serializer.validated_data['comment'],
        )
        return Response(
            RatingSerializer(rating).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )


class CanRateView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request, product_id: int):  # type: ignore
        _require_product(product_id)
        return Response({'can_rate': can_rate(resolve_identity(request), product_id)})
