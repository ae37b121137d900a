"""
Authentication services.

This module provides RatingService, which records user ratings and keeps the
denormalized average on the rated user up to date.

Related files:
    - models.py: User, Rating
    - houses/views.py: PATCH /houses/{id}/rate/ rates the listing owner

Error codes:
    SELF_RATING: A user tried to rate themselves
    INVALID_SCORE: Score outside 1..5
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from django.db.models import Avg, Count

from authentication.models import Rating, User
from core.services import BaseService, ServiceResult

MIN_SCORE = 1
MAX_SCORE = 5


class RatingService(BaseService):
    """
    Record ratings between users.

    Usage:
        result = RatingService.rate_user(request.user, house.owner, 4)
        if result:
            owner = result.data.ratee  # refreshed aggregate fields
    """

    @classmethod
    def rate_user(cls, rater: User, ratee: User, score: int) -> ServiceResult[Rating]:
        """
        Create or replace ``rater``'s score for ``ratee``.

        The ratee row is locked while the aggregate is recomputed so
        concurrent ratings cannot lose an update.

        Returns:
            ServiceResult with the Rating; ``rating.ratee`` carries the new
            average_rating and rating_count
        """
        if rater.pk == ratee.pk:
            return ServiceResult.failure(
                "You cannot rate yourself",
                error_code="SELF_RATING",
            )
        if not isinstance(score, int) or not MIN_SCORE <= score <= MAX_SCORE:
            return ServiceResult.failure(
                f"Score must be between {MIN_SCORE} and {MAX_SCORE}",
                error_code="INVALID_SCORE",
            )

        with cls.atomic():
            locked_ratee = User.objects.select_for_update().get(pk=ratee.pk)
            rating, created = Rating.objects.update_or_create(
                rater=rater,
                ratee=locked_ratee,
                defaults={"score": score},
            )
            totals = Rating.objects.filter(ratee=locked_ratee).aggregate(
                average=Avg("score"),
                count=Count("id"),
            )
            average = Decimal(str(totals["average"] or 0)).quantize(
                Decimal("0.01"), rounding=ROUND_HALF_UP
            )
            User.objects.filter(pk=locked_ratee.pk).update(
                average_rating=average,
                rating_count=totals["count"],
            )

        ratee.refresh_from_db(fields=["average_rating", "rating_count"])
        rating.ratee = ratee

        cls.get_logger().info(
            f"User {rater.id} {'rated' if created else 're-rated'} "
            f"user {ratee.id} with {score}"
        )
        return ServiceResult.success(rating)
