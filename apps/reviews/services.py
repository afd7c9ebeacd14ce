"""Rating eligibility and upsert."""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from apps.bookings.models import Reservation
from apps.users.identity import Identity
from shared.domain.errors import PermissionDeniedError

from .models import Rating

logger = logging.getLogger(__name__)


def can_rate(identity: Optional[Identity], product_id: int, today: Optional[date] = None) -> bool:
    """True when the user holds a confirmed reservation of the product that has ended."""
    if identity is None:
        return False
    today = today or date.today()
    return Reservation.objects.filter(
        user_id=identity.user_id,
        product_id=product_id,
        status=Reservation.Status.CONFIRMED,
        end_date__lte=today,
    ).exists()


def rate_product(identity: Identity, product_id: int, stars: int, comment: str = '') -> tuple[Rating, bool]:
    """Create or update the user's rating of a product.

    Returns the rating and whether it was created.
    """
    if not can_rate(identity, product_id):
        raise PermissionDeniedError('Only guests with a completed confirmed stay may rate this product.')

    rating, created = Rating.objects.update_or_create(
        user_id=identity.user_id,
        product_id=product_id,
        defaults={'stars': stars, 'comment': comment},
    )
    logger.info(
        "Rating %s %s for product %s by user %s: %s star(s)",
        rating.pk, 'created' if created else 'updated', product_id, identity.user_id, stars,
    )
    return rating, created
