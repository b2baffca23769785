"""Domain exceptions for ratings app."""


class RatingsServiceError(Exception):
    """Base exception for all ratings service errors."""
    pass


class RatingNotFoundError(RatingsServiceError):
    """Rating does not exist."""
    pass


class StoreNotFoundError(RatingsServiceError):
    """Store being rated or summarized does not exist."""
    pass


class DuplicateRatingError(RatingsServiceError):
    """User already rated this store."""
    pass


class InvalidRatingValueError(RatingsServiceError):
    """Rating must be an integer between 1 and 5."""
    pass


class UnauthorizedRatingActionError(RatingsServiceError):
    """User cannot modify this rating."""
    pass
