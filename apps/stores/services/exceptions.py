"""
Domain-specific exceptions for stores app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class StoresServiceError(Exception):
    """Base exception for all stores service errors."""
    pass


class StoreNotFoundError(StoresServiceError):
    """Raised when a store does not exist."""
    pass


class OwnerNotFoundError(StoresServiceError):
    """Raised when the user named as store owner does not exist."""
    pass


class DuplicateStoreEmailError(StoresServiceError):
    """Raised when another store already uses the email address."""
    pass


class OwnerAlreadyAssignedError(StoresServiceError):
    """Raised when the proposed owner already owns a different store."""
    pass
