"""
Stores services - Business logic layer.

This package contains all business operations for the stores app:
- Store CRUD operations
- Ownership lifecycle (owner role kept in step with store ownership)
"""

from .store_management import (
    create_store,
    get_store_by_id,
    get_store_for_owner,
    list_stores,
    update_store,
    delete_store,
)

from .ownership import (
    change_store_owner,
    release_store,
    release_owned_store,
)

from .exceptions import (
    StoresServiceError,
    StoreNotFoundError,
    OwnerNotFoundError,
    DuplicateStoreEmailError,
    OwnerAlreadyAssignedError,
)

__all__ = [
    # Store Management Services
    'create_store',
    'get_store_by_id',
    'get_store_for_owner',
    'list_stores',
    'update_store',
    'delete_store',
    # Ownership Lifecycle
    'change_store_owner',
    'release_store',
    'release_owned_store',
    # Exceptions
    'StoresServiceError',
    'StoreNotFoundError',
    'OwnerNotFoundError',
    'DuplicateStoreEmailError',
    'OwnerAlreadyAssignedError',
]
