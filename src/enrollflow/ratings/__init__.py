"""Ratings package - course rating aggregation."""

from enrollflow.ratings.aggregator import RatingAggregator, aggregate_ratings

__all__ = [
    "RatingAggregator",
    "aggregate_ratings",
]
