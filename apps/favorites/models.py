"""Model definition for favorites.

The ``Favorite`` model is a bookmark a user keeps on a product. Duplicate
favorites are prevented via a unique constraint.
"""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore


class Favorite(models.Model):
    """A user's favorite product."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='favorites'
    )
    product = models.ForeignKey(
        'products.Product', on_delete=models.CASCADE, related_name='favorited_by'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['user', 'product'], name='favorite_unique_user_product'),
        ]

    def __str__(self) -> str:
        return f"Favorite product {self.product_id} by user {self.user_id}"
