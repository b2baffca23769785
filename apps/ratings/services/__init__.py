"""
Ratings services - Business logic layer.

This package contains all business operations for the ratings app:
- Rating ledger (submit, update, delete, lookups)
- Aggregation engine (average and distribution)
- Store statistics
"""

from .rating_ledger import (
    submit_rating,
    get_rating_by_id,
    update_rating,
    delete_rating,
    ratings_for_store,
    get_user_rating_for_store,
    list_ratings,
)

from .aggregation import (
    validate_rating_value,
    round_average,
    average_of,
    summarize_ratings,
)

from .statistics import (
    get_store_statistics,
    summarize_store,
)

from .exceptions import (
    RatingsServiceError,
    RatingNotFoundError,
    StoreNotFoundError,
    DuplicateRatingError,
    InvalidRatingValueError,
    UnauthorizedRatingActionError,
)

__all__ = [
    # Rating Ledger
    'submit_rating',
    'get_rating_by_id',
    'update_rating',
    'delete_rating',
    'ratings_for_store',
    'get_user_rating_for_store',
    'list_ratings',
    # Aggregation
    'validate_rating_value',
    'round_average',
    'average_of',
    'summarize_ratings',
    # Statistics
    'get_store_statistics',
    'summarize_store',
    # Exceptions
    'RatingsServiceError',
    'RatingNotFoundError',
    'StoreNotFoundError',
    'DuplicateRatingError',
    'InvalidRatingValueError',
    'UnauthorizedRatingActionError',
]
