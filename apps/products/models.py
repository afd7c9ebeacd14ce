"""Catalog models for Travel Nest.

Products are grouped in categories, tagged with features and carry the
availability windows the booking flow reads.
"""

from __future__ import annotations

from django.db import models  # type: ignore
from django.db.models import Avg, Count  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import DateInterval


class Category(models.Model):
    """Product category shown on the home page."""

    title = models.CharField(max_length=150, unique=True)
    description = models.TextField(blank=True)
    image = models.CharField(
        max_length=500,
        blank=True,
        help_text=_("Path or URL of the category image."),
    )

    class Meta:
        verbose_name = _("Category")
        verbose_name_plural = _("Categories")
        ordering = ["title"]

    def __str__(self) -> str:
        return self.title


class Feature(models.Model):
    """Feature a product can offer (wifi, parking, pool...)."""

    name = models.CharField(max_length=100, unique=True)
    icon = models.CharField(
        max_length=100,
        blank=True,
        help_text=_("Icon identifier used by the frontend."),
    )

    class Meta:
        verbose_name = _("Feature")
        verbose_name_plural = _("Features")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class ProductQuerySet(models.QuerySet):
    def with_rating(self) -> "ProductQuerySet":
        return self.annotate(
            average_rating=Avg("ratings__stars"),
            ratings_count=Count("ratings", distinct=True),
        )


class Product(models.Model):
    """A rentable product."""

    name = models.CharField(max_length=255, unique=True)
    description = models.TextField(blank=True)
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
    )
    features = models.ManyToManyField(Feature, blank=True, related_name="products")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ProductQuerySet.as_manager()

    class Meta:
        verbose_name = _("Product")
        verbose_name_plural = _("Products")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class ProductImage(models.Model):
    """Ordered image reference of a product (upload is handled elsewhere)."""

    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="images")
    path = models.CharField(max_length=500)
    order = models.PositiveIntegerField(default=0)

    class Meta:
        verbose_name = _("Product image")
        verbose_name_plural = _("Product images")
        ordering = ["order", "id"]

    def __str__(self) -> str:
        return f"{self.product.name} [{self.order}]"


class Policy(models.Model):
    """House rule, health and safety or cancellation policy of a product."""

    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="policies")
    title = models.CharField(max_length=150)
    description = models.TextField()

    class Meta:
        verbose_name = _("Policy")
        verbose_name_plural = _("Policies")
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.product.name}: {self.title}"


class AvailabilityWindow(models.Model):
    """Date range during which a product may (or may not) be booked."""

    class Status(models.TextChoices):
        AVAILABLE = "available", _("Available")
        UNAVAILABLE = "unavailable", _("Unavailable")
        BLOCKED = "blocked", _("Blocked by administrator")

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name="availability_windows",
    )
    start_date = models.DateField()
    end_date = models.DateField()
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.AVAILABLE)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Availability window")
        verbose_name_plural = _("Availability windows")
        # Insertion order; windows carry no priority.
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gte=models.F("start_date")),
                name="availability_window_valid_range",
            ),
        ]
        indexes = [
            models.Index(fields=["product", "start_date", "end_date"], name="availability_product_dates_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.product_id}: {self.start_date} - {self.end_date} ({self.status})"

    @property
    def period(self) -> DateInterval:
        return DateInterval(self.start_date, self.end_date)
