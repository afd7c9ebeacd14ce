"""API views for the booking domain.

Views resolve the caller's identity once, hand it to a command or query and
render the result. Domain errors are turned into responses by the project
exception handler.
"""

from __future__ import annotations

import logging

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.products.models import Product
from apps.users.identity import resolve_identity
from apps.users.permissions import IsAdminRole
from shared.domain.errors import NotFoundError, PermissionDeniedError, UnauthenticatedError

from .application.command_handlers import (
    BookingQueries,
    CancelReservationCommand,
    CancelReservationHandler,
    ConfirmReservationCommand,
    ConfirmReservationHandler,
    CreateReservationCommand,
    CreateReservationHandler,
)
from .serializers import (
    AvailabilitySnapshotSerializer,
    AvailabilityWindowSerializer,
    ProductReservationSerializer,
    ReservationCancelSerializer,
    ReservationCreateSerializer,
    ReservationSerializer,
)

logger = logging.getLogger(__name__)


class ReservationViewSet(viewsets.ViewSet):
    """Reservations of the current user.

    - POST /api/v1/reservations/ - request a reservation
    - GET /api/v1/reservations/{id}/ - owner or admin
    - POST /api/v1/reservations/{id}/cancel/ - owner or admin
    - POST /api/v1/reservations/{id}/confirm/ - admin
    - GET /api/v1/reservations/users/{user_id}/ - self or admin
    """

    # A missing identity is reported as ``unauthenticated`` with the domain
    # error payload, not by DRF.
    permission_classes = [permissions.AllowAny]
    lookup_value_regex = r"\d+"

    def _identity(self, request):
        identity = resolve_identity(request)
        if identity is None:
            raise UnauthenticatedError()
        return identity

    def create(self, request):  # type: ignore
        identity = self._identity(request)
        serializer = ReservationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        reservation = CreateReservationHandler().handle(CreateReservationCommand(
            product_id=data["product"],
            user_id=identity.user_id,
            start_date=data["start_date"],
            end_date=data["end_date"],
            notes=data["notes"],
        ))
        return Response(ReservationSerializer(reservation).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):  # type: ignore
        reservation = BookingQueries().get(pk, identity=self._identity(request))
        return Response(ReservationSerializer(reservation).data)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        identity = self._identity(request)
        serializer = ReservationCancelSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        reservation = CancelReservationHandler().handle(CancelReservationCommand(
            reservation_id=pk,
            identity=identity,
            reason=serializer.validated_data["reason"],
        ))
        return Response(ReservationSerializer(reservation).data)

    @action(detail=True, methods=["post"], permission_classes=[IsAdminRole])
    def confirm(self, request, pk=None):  # type: ignore
        reservation = ConfirmReservationHandler().handle(ConfirmReservationCommand(reservation_id=pk))
        return Response(ReservationSerializer(reservation).data)

    @action(detail=False, methods=["get"], url_path=r"users/(?P<user_id>\d+)")
    def for_user(self, request, user_id=None):  # type: ignore
        identity = self._identity(request)
        if not (identity.is_admin or str(identity.user_id) == str(user_id)):
            raise PermissionDeniedError("You can only list your own reservations.")
        reservations = BookingQueries().reservations_for_user(int(user_id))
        return Response(ReservationSerializer(reservations, many=True).data)


class ProductAvailabilityView(APIView):
    """Availability windows of a product; administrators add new ones."""

    def get_permissions(self):  # type: ignore
        if self.request.method == "POST":
            return [IsAdminRole()]
        return [permissions.AllowAny()]

    def get(self, request, product_id: int):  # type: ignore
        windows = BookingQueries().availability(product_id)
        return Response(AvailabilitySnapshotSerializer(windows, many=True).data)

    def post(self, request, product_id: int):  # type: ignore
        product = Product.objects.filter(pk=product_id).first()
        if product is None:
            raise NotFoundError(f"Product {product_id} not found.")
        serializer = AvailabilityWindowSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        window = serializer.save(product=product)
        logger.info(
            "Availability window %s added to product %s: %s - %s (%s)",
            window.pk, product_id, window.start_date, window.end_date, window.status,
        )
        return Response(AvailabilityWindowSerializer(window).data, status=status.HTTP_201_CREATED)


class ProductBookableWindowsView(APIView):
    """Intervals a date picker may offer for a product."""

    permission_classes = [permissions.AllowAny]

    def get(self, request, product_id: int):  # type: ignore
        windows = BookingQueries().bookable_windows(product_id)
        return Response([window.to_dict() for window in windows])


class ProductReservationsView(APIView):
    """Reservations of a product; only administrators see who booked."""

    permission_classes = [permissions.AllowAny]

    def get(self, request, product_id: int):  # type: ignore
        reservations = BookingQueries().reservations_for_product(product_id)
        identity = resolve_identity(request)
        serializer_class = ReservationSerializer if identity and identity.is_admin else ProductReservationSerializer
        return Response(serializer_class(reservations, many=True).data)
