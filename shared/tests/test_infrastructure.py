"""Tests for the health probe and the domain error rendering."""

from __future__ import annotations

from unittest import mock

from django.db import OperationalError
from django.urls import reverse
from rest_framework.test import APITestCase

from shared.domain.errors import InvalidRangeError, StorageUnavailableError
from shared.infrastructure.exception_handler import domain_exception_handler


class HealthCheckTests(APITestCase):
    def test_healthy(self) -> None:
        response = self.client.get(reverse("healthz"))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "healthy", "database": "connected"})

    def test_database_unavailable(self) -> None:
        with mock.patch("shared.infrastructure.health.connection") as connection:
            connection.cursor.side_effect = OperationalError("down")
            response = self.client.get(reverse("healthz"))
        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()["database"], "unavailable")

    def test_only_get(self) -> None:
        self.assertEqual(self.client.post(reverse("healthz")).status_code, 405)


def test_domain_error_is_rendered_with_code_and_status():
    response = domain_exception_handler(InvalidRangeError("bad range"), {"view": None})
    assert response.status_code == 400
    assert response.data == {"detail": "bad range", "code": "invalid_range"}


def test_storage_unavailable_is_503():
    response = domain_exception_handler(StorageUnavailableError(), {})
    assert response.status_code == 503
    assert response.data["code"] == "storage_unavailable"


def test_other_exceptions_fall_through_to_drf():
    assert domain_exception_handler(ValueError("boom"), {"view": None}) is None
