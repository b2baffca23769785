"""
Rating aggregation - average and histogram over a store's rating values.

Pure functions: no database access, no side effects. Callers load the
values (see ``rating_ledger.ratings_for_store``) and pass them in, so the
same numbers come out of every endpoint that shows a store's score.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from apps.ratings.models import MIN_RATING, MAX_RATING
from .exceptions import InvalidRatingValueError

RATING_VALUES = tuple(range(MIN_RATING, MAX_RATING + 1))


def validate_rating_value(value) -> int:
    """
    Return ``value`` if it is an integer score in range.

    Booleans are rejected even though ``bool`` subclasses ``int``.

    Raises:
        InvalidRatingValueError: For non-integers and out-of-range values
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRatingValueError(
            f"Rating must be an integer between {MIN_RATING} and {MAX_RATING}"
        )
    if not (MIN_RATING <= value <= MAX_RATING):
        raise InvalidRatingValueError(
            f"Rating must be an integer between {MIN_RATING} and {MAX_RATING}"
        )
    return value


def round_average(mean) -> float:
    """Round a mean to one decimal place, halves rounding up."""
    return float(Decimal(str(mean)).quantize(Decimal('0.1'), rounding=ROUND_HALF_UP))


def average_of(values: Iterable[int]) -> float:
    """Mean rounded to one decimal place; 0.0 for no values."""
    values = list(values)
    if not values:
        return 0.0
    return round_average(Decimal(sum(values)) / len(values))


def summarize_ratings(values: Iterable[int]) -> dict:
    """
    Aggregate statistics for one store's rating values.

    Args:
        values: Rating values (any order, any iterable)

    Returns:
        Dictionary with:
        - average_rating: float - mean rounded to 1 decimal, 0.0 when empty
        - rating_count: int - number of ratings
        - distribution: dict - count per value, keys 1-5 always present

    Raises:
        InvalidRatingValueError: If any value is not an integer 1-5

    Example:
        >>> summarize_ratings([2, 4, 4])
        {'average_rating': 3.3, 'rating_count': 3, 'distribution': {1: 0, 2: 1, 3: 0, 4: 2, 5: 0}}
    """
    values = [validate_rating_value(value) for value in values]

    distribution = {score: 0 for score in RATING_VALUES}
    for value in values:
        distribution[value] += 1

    return {
        'average_rating': average_of(values),
        'rating_count': len(values),
        'distribution': distribution,
    }
