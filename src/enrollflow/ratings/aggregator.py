"""Rating Aggregator - keeps a course's displayed rating in sync with its reviews."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from enrollflow.record_store import InvalidRatingError
from enrollflow.record_store.derived import round_half_up

if TYPE_CHECKING:
    from enrollflow.record_store import Course, RecordStore, Review

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def aggregate_ratings(ratings: Iterable[int]) -> tuple[float, int]:
    """Compute (average, count) for a set of ratings.

    The average is rounded half-up to one decimal and is 0.0 for no ratings.
    """
    values = list(ratings)
    if not values:
        return 0.0, 0
    return round_half_up(sum(values) / len(values), 1), len(values)


class RatingAggregator:
    """Recomputes course ratings from the full review set.

    Ratings are never nudged up or down in place; every review write is
    followed by a full recompute so a missed update heals on the next one.
    """

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def recompute(self, course_id: str) -> Course:
        """Recompute and store a course's average rating and rating count."""
        course = self.store.recompute_course_rating(course_id, aggregate_ratings)
        logger.debug(
            "Course %s rating recomputed: %.1f over %d reviews",
            course_id,
            course.average_rating,
            course.total_ratings,
        )
        return course

    def submit_review(
        self,
        account_id: str,
        course_id: str,
        rating: int,
        comment: str = "",
    ) -> tuple[Review, Course]:
        """Create or overwrite the account's review, then recompute.

        Raises:
            InvalidRatingError: If rating is outside 1-5
        """
        if not MIN_RATING <= rating <= MAX_RATING:
            raise InvalidRatingError(f"Rating must be between {MIN_RATING} and {MAX_RATING}, got {rating}")
        review = self.store.upsert_review(account_id, course_id, rating, comment)
        return review, self.recompute(course_id)

    def delete_review(self, account_id: str, course_id: str) -> Course:
        """Delete the account's review, then recompute."""
        self.store.delete_review(account_id, course_id)
        return self.recompute(course_id)
