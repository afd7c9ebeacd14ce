"""Booking models for Travel Nest."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import DateInterval


class Reservation(models.Model):
    """Reservation of a product by a user.

    ``end_date`` is the checkout day: the stay occupies the nights
    ``[start_date, end_date)``. Overlap rules live in the booking domain;
    on PostgreSQL an exclusion constraint (see migrations) backs them up.
    """

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending confirmation")
        CONFIRMED = "confirmed", _("Confirmed")
        CANCELLED = "cancelled", _("Cancelled")

    product = models.ForeignKey(
        "products.Product",
        on_delete=models.CASCADE,
        related_name="reservations",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="reservations",
    )
    start_date = models.DateField()
    end_date = models.DateField()
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
    )
    notes = models.TextField(blank=True)
    cancellation_reason = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    confirmed_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        verbose_name = _("Reservation")
        verbose_name_plural = _("Reservations")
        ordering = ["start_date", "id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gt=models.F("start_date")),
                name="reservation_valid_dates",
            ),
        ]
        indexes = [
            models.Index(fields=["product", "start_date", "end_date"], name="reservation_product_dates_idx"),
            models.Index(fields=["user", "start_date"], name="reservation_user_idx"),
            models.Index(fields=["status"], name="reservation_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Reservation #{self.pk} of {self.product_id}: {self.start_date} - {self.end_date}"

    @property
    def period(self) -> DateInterval:
        return DateInterval(self.start_date, self.end_date)
