"""Tests for product ratings."""

from __future__ import annotations

from datetime import date, timedelta

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Reservation
from apps.products.models import Product
from apps.reviews.models import Rating
from apps.users.models import CustomUser


class RatingAPITests(APITestCase):
    def setUp(self) -> None:
        self.guest = CustomUser.objects.create_user(email="guest-rating@example.com", password="GuestPass123")
        self.stranger = CustomUser.objects.create_user(email="stranger@example.com", password="StrangerPass123")
        self.product = Product.objects.create(name="Forest cabin")
        today = date.today()
        self.stay = Reservation.objects.create(
            product=self.product,
            user=self.guest,
            start_date=today - timedelta(days=5),
            end_date=today - timedelta(days=2),
            status=Reservation.Status.CONFIRMED,
        )
        self.url = reverse("product-ratings", kwargs={"product_id": self.product.pk})
        self.can_rate_url = reverse("product-can-rate", kwargs={"product_id": self.product.pk})

    def test_guest_with_finished_stay_can_rate(self) -> None:
        self.client.force_authenticate(self.guest)
        response = self.client.get(self.can_rate_url)
        self.assertEqual(response.data, {"can_rate": True})

        response = self.client.post(self.url, {"stars": 5, "comment": "Lovely"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["stars"], 5)

    def test_rating_again_updates_previous_rating(self) -> None:
        self.client.force_authenticate(self.guest)
        self.client.post(self.url, {"stars": 2}, format="json")
        response = self.client.post(self.url, {"stars": 4, "comment": "Better on reflection"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        rating = Rating.objects.get()
        self.assertEqual(rating.stars, 4)
        self.assertEqual(rating.comment, "Better on reflection")

    def test_user_without_stay_cannot_rate(self) -> None:
        self.client.force_authenticate(self.stranger)
        self.assertEqual(self.client.get(self.can_rate_url).data, {"can_rate": False})

        response = self.client.post(self.url, {"stars": 1}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["code"], "forbidden")
        self.assertFalse(Rating.objects.exists())

    def test_pending_or_future_stay_does_not_count(self) -> None:
        self.stay.status = Reservation.Status.PENDING
        self.stay.save()
        self.client.force_authenticate(self.guest)
        self.assertEqual(self.client.get(self.can_rate_url).data, {"can_rate": False})

        self.stay.status = Reservation.Status.CONFIRMED
        self.stay.end_date = date.today() + timedelta(days=1)
        self.stay.save()
        self.assertEqual(self.client.get(self.can_rate_url).data, {"can_rate": False})

    def test_stars_out_of_range(self) -> None:
        self.client.force_authenticate(self.guest)
        response = self.client.post(self.url, {"stars": 6}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("stars", response.data)

    def test_anonymous_cannot_rate(self) -> None:
        response = self.client.post(self.url, {"stars": 3}, format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(self.client.get(self.can_rate_url).data, {"can_rate": False})

    def test_ratings_are_public(self) -> None:
        Rating.objects.create(user=self.guest, product=self.product, stars=3, comment="Fine")
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data[0]["comment"], "Fine")

    def test_unknown_product(self) -> None:
        response = self.client.get(reverse("product-ratings", kwargs={"product_id": 999}))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
