"""
Ownership lifecycle - keeps User.role in step with store ownership.

``User.role`` is a denormalized copy of "does this user own a store", kept
on the user row so the store-owner permission check needs no join. This
module is the only writer of that copy. Every function here expects to run
inside the caller's ``transaction.atomic`` block so the role flip and the
store mutation commit or roll back together.

Role states for a non-admin user:

    NoStore   (USER)         --becomes owner of a store-->   OwnsStore
    OwnsStore (STORE_OWNER)  --store reassigned/cleared/deleted-->  NoStore

ADMIN accounts can own a store but are never promoted or demoted by these
transitions. Rating events never trigger a transition.
"""

import logging
from typing import Optional
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import transaction

from apps.accounts.models import UserRole
from apps.stores.models import Store
from .exceptions import OwnerNotFoundError, OwnerAlreadyAssignedError

User = get_user_model()
logger = logging.getLogger(__name__)


def _lock_user(user_id: UUID) -> User:
    try:
        return (
            User.objects
            .select_for_update()
            .get(id=user_id)
        )
    except User.DoesNotExist:
        raise OwnerNotFoundError("Owner not found")


def promote_to_store_owner(user: User) -> None:
    """USER -> STORE_OWNER. No-op for admins and existing owners."""
    if user.role != UserRole.USER:
        return

    user.role = UserRole.STORE_OWNER
    user.save(update_fields=['role', 'updated_at'])
    logger.info("User %s promoted to store owner", user.id)


def demote_from_store_owner(user: User) -> None:
    """STORE_OWNER -> USER. No-op for admins and plain users."""
    if user.role != UserRole.STORE_OWNER:
        return

    user.role = UserRole.USER
    user.save(update_fields=['role', 'updated_at'])
    logger.info("User %s demoted to user", user.id)


@transaction.atomic
def resolve_new_owner(*, owner_id: UUID, store: Optional[Store] = None) -> User:
    """
    Lock and validate the user about to become ``store``'s owner.

    ``store`` is None while the store is being created.

    Raises:
        OwnerNotFoundError: If no user has that id
        OwnerAlreadyAssignedError: If the user owns a different store
    """
    owner = _lock_user(owner_id)

    other_stores = Store.objects.filter(owner=owner)
    if store is not None and store.pk:
        other_stores = other_stores.exclude(pk=store.pk)

    if other_stores.exists():
        raise OwnerAlreadyAssignedError("User already owns another store")

    return owner


@transaction.atomic
def change_store_owner(*, store: Store, owner_id: Optional[UUID]) -> Store:
    """
    Point a saved store at a new owner, or at nobody.

    Handles assign (none -> B), reassign (A -> B) and clear (A -> none).
    B is promoted and A demoted in the same transaction as the store write.

    Args:
        store: Store row, already locked by the caller
        owner_id: New owner's id, or None to leave the store ownerless

    Returns:
        The saved store

    Raises:
        OwnerNotFoundError: If owner_id names no user
        OwnerAlreadyAssignedError: If the new owner owns a different store
    """
    if owner_id is not None and not isinstance(owner_id, UUID):
        owner_id = UUID(str(owner_id))

    if owner_id == store.owner_id:
        return store

    new_owner = None
    if owner_id is not None:
        new_owner = resolve_new_owner(owner_id=owner_id, store=store)

    previous_owner = _lock_user(store.owner_id) if store.owner_id else None

    store.owner = new_owner
    store.save(update_fields=['owner', 'updated_at'])

    # A owns at most one store, so losing this one always leaves A with none
    if previous_owner is not None:
        demote_from_store_owner(previous_owner)
    if new_owner is not None:
        promote_to_store_owner(new_owner)

    logger.info(
        "Store %s ownership changed: %s -> %s",
        store.id,
        previous_owner.id if previous_owner else None,
        new_owner.id if new_owner else None,
    )
    return store


@transaction.atomic
def release_store(*, store: Store) -> None:
    """Demote the owner of a store that is about to be deleted."""
    if store.owner_id is None:
        return

    owner = _lock_user(store.owner_id)
    demote_from_store_owner(owner)
    logger.info("Store %s released by owner %s", store.id, owner.id)


@transaction.atomic
def release_owned_store(*, user: User) -> Optional[Store]:
    """
    Detach a user who is about to be deleted from the store they own.

    The store survives without an owner. Returns the detached store, if any.
    """
    store = (
        Store.objects
        .select_for_update()
        .filter(owner=user)
        .first()
    )
    if store is None:
        return None

    store.owner = None
    store.save(update_fields=['owner', 'updated_at'])
    logger.info("Store %s left without owner after user %s was removed", store.id, user.id)
    return store
