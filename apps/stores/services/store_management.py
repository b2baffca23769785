"""Store management service - CRUD operations for stores."""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import QuerySet, Prefetch

from apps.stores.models import Store
from apps.ratings.models import Rating
from . import ownership
from .exceptions import (
    StoreNotFoundError,
    DuplicateStoreEmailError,
    OwnerAlreadyAssignedError,
)

logger = logging.getLogger(__name__)

STORE_ORDERING_FIELDS = ('name', 'email', 'address', 'created_at')


def _email_taken(email: str, exclude_id: Optional[UUID] = None) -> bool:
    queryset = Store.objects.filter(email__iexact=email)
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)
    return queryset.exists()


def _integrity_error_for(store: Store) -> Exception:
    """Work out which unique constraint a failed store write hit."""
    if _email_taken(store.email, exclude_id=store.id):
        return DuplicateStoreEmailError("Store already exists with this email")
    return OwnerAlreadyAssignedError("User already owns another store")


@transaction.atomic
def create_store(
    *,
    name: str,
    email: str,
    address: str,
    owner_id: Optional[UUID] = None
) -> Store:
    """
    Create a store, optionally with an owner.

    This operation:
    1. Rejects an email already used by another store
    2. Locks and validates the owner (exists, owns no other store)
    3. Creates the store
    4. Promotes the owner to STORE_OWNER in the same transaction

    Args:
        name: Store name
        email: Unique store email
        address: Postal address
        owner_id: Optional UUID of the owning user

    Returns:
        Created Store instance

    Raises:
        DuplicateStoreEmailError: If email is already used by a store
        OwnerNotFoundError: If owner_id names no user
        OwnerAlreadyAssignedError: If the owner already owns a store
    """
    if _email_taken(email):
        raise DuplicateStoreEmailError("Store already exists with this email")

    owner = None
    if owner_id is not None:
        owner = ownership.resolve_new_owner(owner_id=owner_id)

    store = Store(name=name, email=email, address=address, owner=owner)
    try:
        with transaction.atomic():
            store.save(force_insert=True)
    except IntegrityError:
        raise _integrity_error_for(store)

    if owner is not None:
        ownership.promote_to_store_owner(owner)

    logger.info("Created store %s (owner %s)", store.id, owner.id if owner else None)
    return store


def get_store_by_id(*, store_id: UUID) -> Store:
    """
    Retrieve a store with its owner and ratings preloaded.

    Raises:
        StoreNotFoundError: If store doesn't exist
    """
    try:
        return (
            Store.objects
            .select_related('owner')
            .prefetch_related('ratings')
            .get(id=store_id)
        )
    except Store.DoesNotExist:
        raise StoreNotFoundError("Store not found")


def list_stores(
    *,
    name: Optional[str] = None,
    address: Optional[str] = None,
    email: Optional[str] = None,
    ordering: Optional[str] = None
) -> QuerySet[Store]:
    """
    Filter and sort stores for listings.

    Ratings are prefetched (values only) so each row's aggregate can be
    computed without one query per store.
    """
    queryset = (
        Store.objects
        .select_related('owner')
        .prefetch_related(
            Prefetch('ratings', queryset=Rating.objects.only('id', 'store_id', 'user_id', 'value'))
        )
    )

    if name:
        queryset = queryset.filter(name__icontains=name)

    if address:
        queryset = queryset.filter(address__icontains=address)

    if email:
        queryset = queryset.filter(email__icontains=email)

    if not ordering or ordering.lstrip('-') not in STORE_ORDERING_FIELDS:
        ordering = 'name'

    return queryset.order_by(ordering, 'id')


@transaction.atomic
def update_store(
    *,
    store_id: UUID,
    name: Optional[str] = None,
    email: Optional[str] = None,
    address: Optional[str] = None,
    owner_id: Optional[UUID] = None,
    clear_owner: bool = False
) -> Store:
    """
    Update store fields and/or hand the store to another owner.

    Passing owner_id reassigns the store (previous owner demoted, new owner
    promoted). clear_owner=True leaves the store ownerless and demotes the
    previous owner. Fields left as None are unchanged.

    Raises:
        StoreNotFoundError: If store doesn't exist
        DuplicateStoreEmailError: If email is used by another store
        OwnerNotFoundError: If owner_id names no user
        OwnerAlreadyAssignedError: If the new owner owns a different store
    """
    try:
        store = (
            Store.objects
            .select_for_update()
            .get(id=store_id)
        )
    except Store.DoesNotExist:
        raise StoreNotFoundError("Store not found")

    if email is not None and email.lower() != store.email.lower():
        if _email_taken(email, exclude_id=store.id):
            raise DuplicateStoreEmailError("Email is already taken")

    update_fields = []
    if name is not None:
        store.name = name
        update_fields.append('name')
    if email is not None:
        store.email = email
        update_fields.append('email')
    if address is not None:
        store.address = address
        update_fields.append('address')

    if update_fields:
        update_fields.append('updated_at')
        try:
            with transaction.atomic():
                store.save(update_fields=update_fields)
        except IntegrityError:
            raise DuplicateStoreEmailError("Email is already taken")

    if clear_owner:
        ownership.change_store_owner(store=store, owner_id=None)
    elif owner_id is not None:
        try:
            with transaction.atomic():
                ownership.change_store_owner(store=store, owner_id=owner_id)
        except IntegrityError:
            raise OwnerAlreadyAssignedError("User already owns another store")

    return store


@transaction.atomic
def delete_store(*, store_id: UUID) -> None:
    """
    Delete a store and every rating it received.

    The owner, if any, goes back to USER.

    Raises:
        StoreNotFoundError: If store doesn't exist
    """
    try:
        store = (
            Store.objects
            .select_for_update()
            .get(id=store_id)
        )
    except Store.DoesNotExist:
        raise StoreNotFoundError("Store not found")

    ownership.release_store(store=store)

    # CASCADE removes the store's ratings
    store.delete()
    logger.info("Deleted store %s", store_id)


def get_store_for_owner(*, user) -> Store:
    """
    The store owned by ``user``.

    Raises:
        StoreNotFoundError: If the user owns no store
    """
    try:
        return Store.objects.get(owner=user)
    except Store.DoesNotExist:
        raise StoreNotFoundError("Store not found for this owner")
