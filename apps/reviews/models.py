"""Models for the rating domain.

A ``Rating`` is the score a guest gives a product after a confirmed stay.
One user holds at most one rating per product; rating again updates it.
"""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Rating(models.Model):
    """Score from 1 to 5 left by a guest for a product."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='ratings'
    )
    product = models.ForeignKey(
        'products.Product', on_delete=models.CASCADE, related_name='ratings'
    )
    stars = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)],
        help_text=_('Score from 1 to 5'),
    )
    comment = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Rating')
        verbose_name_plural = _('Ratings')
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['user', 'product'], name='rating_unique_user_product'),
            models.CheckConstraint(
                condition=models.Q(stars__gte=1) & models.Q(stars__lte=5),
                name='rating_stars_range',
            ),
        ]
        indexes = [
            models.Index(fields=['product', '-created_at'], name='rating_product_created_idx'),
        ]

    def __str__(self) -> str:
        return f"Rating by {self.user_id} for product {self.product_id} ({self.stars})"
