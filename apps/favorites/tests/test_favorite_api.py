"""Tests for the favorites API."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.favorites.models import Favorite
from apps.products.models import Product
from apps.users.models import CustomUser


class FavoriteAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = CustomUser.objects.create_user(email="fav@example.com", password="FavPass123")
        self.other = CustomUser.objects.create_user(email="fav-other@example.com", password="FavPass123")
        self.product = Product.objects.create(name="Beach house")
        self.client.force_authenticate(self.user)

    def test_favorites_flow(self) -> None:
        response = self.client.post(reverse("favorite-list"), {"product": self.product.pk}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["product"]["name"], "Beach house")

        list_resp = self.client.get(reverse("favorite-list"))
        self.assertEqual(list_resp.data["count"], 1)

        delete_resp = self.client.delete(reverse("favorite-detail", args=[self.product.pk]))
        self.assertEqual(delete_resp.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Favorite.objects.exists())

    def test_adding_twice_keeps_one_favorite(self) -> None:
        self.client.post(reverse("favorite-list"), {"product": self.product.pk}, format="json")
        response = self.client.post(reverse("favorite-list"), {"product": self.product.pk}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(Favorite.objects.count(), 1)

    def test_favorites_are_per_user(self) -> None:
        Favorite.objects.create(user=self.other, product=self.product)
        self.assertEqual(self.client.get(reverse("favorite-list")).data["count"], 0)
        response = self.client.delete(reverse("favorite-detail", args=[self.product.pk]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_unknown_product(self) -> None:
        response = self.client.post(reverse("favorite-list"), {"product": 999}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_requires_authentication(self) -> None:
        self.client.force_authenticate(None)
        response = self.client.get(reverse("favorite-list"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
