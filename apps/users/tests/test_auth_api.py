"""API tests for authentication and user management endpoints."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase
from rest_framework_simplejwt.tokens import AccessToken  # type: ignore

from apps.users.models import CustomUser


class AuthAPITests(APITestCase):
    def test_register_returns_tokens_and_client_role(self) -> None:
        payload = {
            "first_name": "Ana",
            "last_name": "Gomez",
            "email": "ana@example.com",
            "password": "StrongPass123",
        }

        response = self.client.post(reverse("auth:register"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertIn("tokens", response.data)
        self.assertEqual(response.data["user"]["email"], payload["email"])
        self.assertEqual(response.data["user"]["role"], CustomUser.RoleChoices.CLIENT)
        self.assertTrue(CustomUser.objects.filter(email=payload["email"]).exists())

    def test_register_rejects_duplicate_email(self) -> None:
        CustomUser.objects.create_user(email="taken@example.com", password="StrongPass123")
        payload = {
            "first_name": "Other",
            "last_name": "Person",
            "email": "TAKEN@example.com",
            "password": "StrongPass123",
        }

        response = self.client.post(reverse("auth:register"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("email", response.data)

    def test_login_access_token_carries_role_and_email(self) -> None:
        CustomUser.objects.create_user(
            email="boss@example.com",
            password="CorrectPassword1",
            role=CustomUser.RoleChoices.ADMIN,
        )

        response = self.client.post(
            reverse("auth:login"),
            {"email": "boss@example.com", "password": "CorrectPassword1"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        token = AccessToken(response.data["tokens"]["access"])
        self.assertEqual(token["role"], "admin")
        self.assertEqual(token["email"], "boss@example.com")

    def test_login_with_wrong_password_fails(self) -> None:
        CustomUser.objects.create_user(email="guest@example.com", password="CorrectPassword1")

        response = self.client.post(
            reverse("auth:login"),
            {"email": "guest@example.com", "password": "wrong"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_session_resolves_identity(self) -> None:
        user = CustomUser.objects.create_user(email="me@example.com", password="CorrectPassword1")
        self.client.force_authenticate(user)

        response = self.client.get(reverse("auth:session"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"user_id": user.pk, "email": "me@example.com", "role": "client"})

    def test_session_without_credentials_is_unauthenticated(self) -> None:
        response = self.client.get(reverse("auth:session"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["code"], "unauthenticated")


class UserManagementAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = CustomUser.objects.create_user(
            email="admin@example.com",
            password="AdminPass123",
            role=CustomUser.RoleChoices.ADMIN,
        )
        self.client_user = CustomUser.objects.create_user(email="client@example.com", password="ClientPass123")

    def test_admin_lists_users(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.get(reverse("user-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 2)

    def test_client_cannot_list_users(self) -> None:
        self.client.force_authenticate(self.client_user)
        response = self.client.get(reverse("user-list"))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_promotes_client(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.patch(
            reverse("user-role", args=[self.client_user.pk]),
            {"role": "admin"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.client_user.refresh_from_db()
        self.assertEqual(self.client_user.role, CustomUser.RoleChoices.ADMIN)

    def test_client_cannot_change_roles(self) -> None:
        self.client.force_authenticate(self.client_user)
        response = self.client.patch(
            reverse("user-role", args=[self.client_user.pk]),
            {"role": "admin"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_me_returns_own_profile(self) -> None:
        self.client.force_authenticate(self.client_user)
        response = self.client.get(reverse("user-me"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["email"], "client@example.com")
