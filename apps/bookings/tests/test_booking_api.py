"""Integration tests for reservation API endpoints."""

from __future__ import annotations

from datetime import date
from unittest import mock

from django.db import IntegrityError, OperationalError
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Reservation
from apps.products.models import AvailabilityWindow, Product
from apps.users.models import CustomUser


class ReservationAPITests(APITestCase):
    """Creation, conflicts, cancellation and the error payloads."""

    def setUp(self) -> None:
        self.guest = CustomUser.objects.create_user(email="guest@example.com", password="GuestPass123")
        self.other = CustomUser.objects.create_user(email="other@example.com", password="OtherPass123")
        self.admin = CustomUser.objects.create_user(
            email="admin@example.com",
            password="AdminPass123",
            role=CustomUser.RoleChoices.ADMIN,
        )
        self.product = Product.objects.create(name="Cabin by the lake", description="Wooden cabin.")
        AvailabilityWindow.objects.create(
            product=self.product,
            start_date=date(2025, 6, 1),
            end_date=date(2025, 6, 10),
        )
        self.client.force_authenticate(self.guest)
        self.list_url = reverse("reservation-list")

    def _payload(self, start: str, end: str, **extra) -> dict[str, object]:
        return {"product": self.product.pk, "start_date": start, "end_date": end, **extra}

    def _confirmed(self, start: date, end: date, user=None) -> Reservation:
        return Reservation.objects.create(
            product=self.product,
            user=user or self.other,
            start_date=start,
            end_date=end,
            status=Reservation.Status.CONFIRMED,
        )

    def test_guest_can_create_reservation(self) -> None:
        response = self.client.post(self.list_url, self._payload("2025-06-02", "2025-06-05", notes="Late arrival"), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["status"], "pending")
        self.assertEqual(response.data["start_date"], "2025-06-02")
        self.assertEqual(response.data["nights"], 3)
        reservation = Reservation.objects.get()
        self.assertEqual(reservation.user, self.guest)
        self.assertEqual(reservation.notes, "Late arrival")

    def test_user_comes_from_identity_not_payload(self) -> None:
        response = self.client.post(
            self.list_url,
            self._payload("2025-06-02", "2025-06-05", user=self.other.pk),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(Reservation.objects.get().user, self.guest)

    def test_overlapping_reservation_conflicts(self) -> None:
        self._confirmed(date(2025, 6, 2), date(2025, 6, 5))

        response = self.client.post(self.list_url, self._payload("2025-06-04", "2025-06-08"), format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["code"], "date_conflict")
        self.assertEqual(response.data["conflicts"], [{"start_date": "2025-06-02", "end_date": "2025-06-05"}])
        self.assertEqual(Reservation.objects.count(), 1)

    def test_touching_boundary_is_allowed(self) -> None:
        self._confirmed(date(2025, 6, 2), date(2025, 6, 5))

        response = self.client.post(self.list_url, self._payload("2025-06-05", "2025-06-08"), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

    def test_cancel_then_rebook_same_range(self) -> None:
        created = self.client.post(self.list_url, self._payload("2025-06-02", "2025-06-05"), format="json")
        cancel_url = reverse("reservation-cancel", args=[created.data["id"]])

        cancelled = self.client.post(cancel_url, {"reason": "Plans changed"}, format="json")
        self.assertEqual(cancelled.status_code, status.HTTP_200_OK, cancelled.data)
        self.assertEqual(cancelled.data["status"], "cancelled")

        again = self.client.post(self.list_url, self._payload("2025-06-02", "2025-06-05"), format="json")
        self.assertEqual(again.status_code, status.HTTP_201_CREATED, again.data)

    def test_outside_availability(self) -> None:
        response = self.client.post(self.list_url, self._payload("2025-06-08", "2025-06-12"), format="json")

        self.assertEqual(response.status_code, status.HTTP_422_UNPROCESSABLE_ENTITY)
        self.assertEqual(response.data["code"], "outside_availability")
        self.assertEqual(response.data["available_windows"], [{"start_date": "2025-06-01", "end_date": "2025-06-10"}])

    def test_invalid_ranges(self) -> None:
        for start, end in [("2025-06-05", "2025-06-02"), ("2025-06-05", "2025-06-05"), ("june", "2025-06-05")]:
            response = self.client.post(self.list_url, self._payload(start, end), format="json")
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, (start, end))
            self.assertEqual(response.data["code"], "invalid_range")
        self.assertFalse(Reservation.objects.exists())

    def test_anonymous_request_is_unauthenticated(self) -> None:
        self.client.force_authenticate(None)

        response = self.client.post(self.list_url, self._payload("2025-06-02", "2025-06-05"), format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["code"], "unauthenticated")

    def test_unknown_product_is_not_found(self) -> None:
        response = self.client.post(
            self.list_url,
            {"product": 9999, "start_date": "2025-06-02", "end_date": "2025-06-05"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_storage_rejection_is_reported_as_conflict(self) -> None:
        with mock.patch.object(Reservation.objects, "create", side_effect=IntegrityError("reservation_no_overlap")):
            response = self.client.post(self.list_url, self._payload("2025-06-02", "2025-06-05"), format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["code"], "date_conflict")

    def test_storage_outage_is_unavailable(self) -> None:
        with mock.patch.object(Reservation.objects, "create", side_effect=OperationalError("server closed the connection")):
            response = self.client.post(self.list_url, self._payload("2025-06-02", "2025-06-05"), format="json")

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(response.data["code"], "storage_unavailable")

    def test_retrieve_is_owner_or_admin(self) -> None:
        reservation = self._confirmed(date(2025, 6, 2), date(2025, 6, 5), user=self.guest)
        url = reverse("reservation-detail", args=[reservation.pk])

        self.assertEqual(self.client.get(url).status_code, status.HTTP_200_OK)

        self.client.force_authenticate(self.other)
        self.assertEqual(self.client.get(url).status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.admin)
        self.assertEqual(self.client.get(url).status_code, status.HTTP_200_OK)

    def test_other_user_cannot_cancel(self) -> None:
        reservation = self._confirmed(date(2025, 6, 2), date(2025, 6, 5), user=self.guest)
        self.client.force_authenticate(self.other)

        response = self.client.post(reverse("reservation-cancel", args=[reservation.pk]), format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        reservation.refresh_from_db()
        self.assertEqual(reservation.status, Reservation.Status.CONFIRMED)

    def test_cancelled_reservation_cannot_be_cancelled_again(self) -> None:
        reservation = self._confirmed(date(2025, 6, 2), date(2025, 6, 5), user=self.guest)
        url = reverse("reservation-cancel", args=[reservation.pk])

        self.assertEqual(self.client.post(url, format="json").status_code, status.HTTP_200_OK)
        response = self.client.post(url, format="json")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["code"], "invalid_transition")

    def test_anonymous_cancel_is_unauthenticated_before_body_validation(self) -> None:
        reservation = self._confirmed(date(2025, 6, 2), date(2025, 6, 5), user=self.guest)
        self.client.force_authenticate(None)

        response = self.client.post(
            reverse("reservation-cancel", args=[reservation.pk]),
            {"reason": "x" * 300},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["code"], "unauthenticated")

    def test_admin_confirms_pending_reservation(self) -> None:
        created = self.client.post(self.list_url, self._payload("2025-06-02", "2025-06-05"), format="json")
        url = reverse("reservation-confirm", args=[created.data["id"]])

        self.assertEqual(self.client.post(url, format="json").status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.admin)
        response = self.client.post(url, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], "confirmed")
        self.assertIsNotNone(Reservation.objects.get().confirmed_at)

    def test_list_reservations_of_user(self) -> None:
        self._confirmed(date(2025, 6, 2), date(2025, 6, 5), user=self.guest)
        self._confirmed(date(2025, 6, 6), date(2025, 6, 8), user=self.other)
        url = reverse("reservation-for-user", args=[self.guest.pk])

        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)

        forbidden = self.client.get(reverse("reservation-for-user", args=[self.other.pk]))
        self.assertEqual(forbidden.status_code, status.HTTP_403_FORBIDDEN)


class ProductAvailabilityAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = CustomUser.objects.create_user(
            email="admin@example.com",
            password="AdminPass123",
            role=CustomUser.RoleChoices.ADMIN,
        )
        self.guest = CustomUser.objects.create_user(email="guest@example.com", password="GuestPass123")
        self.product = Product.objects.create(name="Loft downtown")
        AvailabilityWindow.objects.create(product=self.product, start_date=date(2025, 6, 1), end_date=date(2025, 6, 10))
        AvailabilityWindow.objects.create(
            product=self.product,
            start_date=date(2025, 6, 11),
            end_date=date(2025, 6, 20),
            status=AvailabilityWindow.Status.BLOCKED,
        )

    def test_availability_lists_every_window(self) -> None:
        response = self.client.get(reverse("product-availability", args=[self.product.pk]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([w["status"] for w in response.data], ["available", "blocked"])

    def test_bookable_windows_only_available(self) -> None:
        response = self.client.get(reverse("product-bookable-windows", args=[self.product.pk]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, [{"start_date": "2025-06-01", "end_date": "2025-06-10"}])

    def test_unknown_product_availability_is_not_found(self) -> None:
        response = self.client.get(reverse("product-availability", args=[9999]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_admin_adds_window(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.post(
            reverse("product-availability", args=[self.product.pk]),
            {"start_date": "2025-07-01", "end_date": "2025-07-31", "status": "available"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(self.product.availability_windows.count(), 3)

    def test_inverted_window_is_invalid_range(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.post(
            reverse("product-availability", args=[self.product.pk]),
            {"start_date": "2025-07-31", "end_date": "2025-07-01"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "invalid_range")

    def test_client_cannot_add_window(self) -> None:
        self.client.force_authenticate(self.guest)
        response = self.client.post(
            reverse("product-availability", args=[self.product.pk]),
            {"start_date": "2025-07-01", "end_date": "2025-07-31"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_product_reservations_hide_guests_from_public(self) -> None:
        Reservation.objects.create(
            product=self.product,
            user=self.guest,
            start_date=date(2025, 6, 2),
            end_date=date(2025, 6, 5),
        )
        url = reverse("product-reservations", args=[self.product.pk])

        public = self.client.get(url)
        self.assertEqual(public.status_code, status.HTTP_200_OK)
        self.assertNotIn("user", public.data[0])

        self.client.force_authenticate(self.admin)
        private = self.client.get(url)
        self.assertEqual(private.data[0]["user"], self.guest.pk)
