"""Catalog API views."""

from __future__ import annotations

import logging

from django.db.models import Prefetch  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import generics, permissions, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.bookings.domain.availability import AvailabilityIndex
from apps.bookings.domain.conflicts import BLOCKING_STATUSES, ConflictDetector
from apps.bookings.models import Reservation
from apps.bookings.repositories import to_entity, to_snapshot
from apps.users.permissions import AdminWriteOrReadOnly
from shared.domain.value_objects import DateInterval

from .filters import ProductFilterSet, text_query
from .models import Category, Feature, Product
from .serializers import (
    CategorySerializer,
    FeatureSerializer,
    PolicySerializer,
    ProductSerializer,
    ProductWriteSerializer,
)

logger = logging.getLogger(__name__)

SUGGESTION_LIMIT = 10


def catalog_queryset():
    return (
        Product.objects.with_rating()
        .select_related("category")
        .prefetch_related("features", "images", "policies")
    )


class CategoryViewSet(viewsets.ModelViewSet):
    """Categories: public read, administrator write."""

    queryset = Category.objects.all()
    serializer_class = CategorySerializer
    permission_classes = [AdminWriteOrReadOnly]
    pagination_class = None


class FeatureViewSet(viewsets.ModelViewSet):
    """Features: public read, administrator write."""

    queryset = Feature.objects.all()
    serializer_class = FeatureSerializer
    permission_classes = [AdminWriteOrReadOnly]
    pagination_class = None


class ProductViewSet(viewsets.ModelViewSet):
    """Products: public read, administrator write."""

    permission_classes = [AdminWriteOrReadOnly]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = ProductFilterSet
    ordering_fields = ["name", "created_at"]
    lookup_value_regex = r"\d+"

    def get_queryset(self):  # type: ignore
        return catalog_queryset()

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return ProductWriteSerializer
        return ProductSerializer

    def perform_create(self, serializer):  # type: ignore
        product = serializer.save()
        logger.info("Product %s created by %s", product.pk, self.request.user.pk)

    def perform_destroy(self, instance):  # type: ignore
        logger.info("Product %s deleted by %s", instance.pk, self.request.user.pk)
        instance.delete()

    @action(detail=True, methods=["get"])
    def policies(self, request, pk=None):  # type: ignore
        product = self.get_object()
        return Response(PolicySerializer(product.policies.all(), many=True).data)


class SearchProductsView(generics.ListAPIView):
    """Text search with an optional stay.

    With both ``start_date`` and ``end_date`` only products that could take
    the reservation are returned: the same availability and conflict rules
    as reservation creation, evaluated over prefetched rows.
    """

    serializer_class = ProductSerializer
    permission_classes = [permissions.AllowAny]

    def get_queryset(self):  # type: ignore
        return text_query(catalog_queryset(), self.request.query_params.get("query", ""))

    def list(self, request, *args, **kwargs):  # type: ignore
        start = request.query_params.get("start_date")
        end = request.query_params.get("end_date")
        if not (start and end):
            return super().list(request, *args, **kwargs)

        proposed = DateInterval.parse(start, end)
        # Rejects a zero-night stay before any product is examined.
        proposed.nights()
        queryset = self.get_queryset().prefetch_related(
            "availability_windows",
            Prefetch(
                "reservations",
                queryset=Reservation.objects.filter(status__in=[s.value for s in BLOCKING_STATUSES]),
                to_attr="blocking_reservations",
            ),
        )
        detector = ConflictDetector()
        matches = [
            product
            for product in queryset
            if detector.is_bookable(
                product.pk,
                proposed,
                AvailabilityIndex(to_snapshot(window) for window in product.availability_windows.all()),
                [to_entity(row) for row in product.blocking_reservations],
            )
        ]
        logger.debug("Search %s matched %d product(s)", proposed, len(matches))

        page = self.paginate_queryset(matches)
        if page is not None:
            return self.get_paginated_response(self.get_serializer(page, many=True).data)
        return Response(self.get_serializer(matches, many=True).data)


class SuggestProductsView(APIView):
    """Product names for the search box autocomplete."""

    permission_classes = [permissions.AllowAny]

    def get(self, request):  # type: ignore
        query = request.query_params.get("query", "").strip()
        if len(query) < 2:
            return Response([])
        names = Product.objects.filter(name__icontains=query).order_by("name").values_list("name", flat=True)
        return Response(list(names[:SUGGESTION_LIMIT]))
