"""Rating ledger - one rating per (user, store), with CRUD on single ratings."""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.ratings.models import Rating
from apps.stores.models import Store
from .aggregation import validate_rating_value
from .exceptions import (
    RatingNotFoundError,
    StoreNotFoundError,
    DuplicateRatingError,
    UnauthorizedRatingActionError,
)

logger = logging.getLogger(__name__)


@transaction.atomic
def submit_rating(*, user: User, store_id: UUID, value: int) -> Rating:
    """
    Record a user's first rating for a store.

    This operation:
    1. Validates the value (integer 1-5)
    2. Checks the store exists
    3. Rejects a second rating for the same (user, store)
    4. Inserts the rating; a concurrent insert for the same pair loses on
       the database unique constraint and is reported as a duplicate

    Args:
        user: User submitting the rating
        store_id: UUID of store being rated
        value: Score 1-5

    Returns:
        Created Rating instance

    Raises:
        InvalidRatingValueError: If value is not an integer 1-5
        StoreNotFoundError: If store doesn't exist
        DuplicateRatingError: If user already rated this store
    """
    validate_rating_value(value)

    try:
        store = Store.objects.get(id=store_id)
    except Store.DoesNotExist:
        raise StoreNotFoundError("Store not found")

    if Rating.objects.filter(user=user, store=store).exists():
        raise DuplicateRatingError(
            "You have already rated this store. Update your existing rating instead."
        )

    try:
        with transaction.atomic():
            rating = Rating.objects.create(user=user, store=store, value=value)
    except IntegrityError:
        # Database unique constraint caught duplicate
        raise DuplicateRatingError("You have already rated this store")

    logger.info("User %s rated store %s with %s", user.id, store.id, value)
    return rating


def get_rating_by_id(*, rating_id: UUID) -> Rating:
    """
    Retrieve a rating by ID.

    Raises:
        RatingNotFoundError: If rating doesn't exist
    """
    try:
        return Rating.objects.select_related('user', 'store').get(id=rating_id)
    except Rating.DoesNotExist:
        raise RatingNotFoundError("Rating not found")


@transaction.atomic
def update_rating(*, rating_id: UUID, user: User, value: int) -> Rating:
    """
    Change the value of an existing rating.

    Only the rating's author can update it. The store and author never
    change.

    Raises:
        RatingNotFoundError: If rating doesn't exist
        UnauthorizedRatingActionError: If user is not the author
        InvalidRatingValueError: If value is not an integer 1-5
    """
    # Get rating with row lock
    try:
        rating = (
            Rating.objects
            .select_for_update()
            .get(id=rating_id)
        )
    except Rating.DoesNotExist:
        raise RatingNotFoundError("Rating not found")

    if rating.user_id != user.id:
        raise UnauthorizedRatingActionError("You can only update your own ratings")

    validate_rating_value(value)

    rating.value = value
    rating.save(update_fields=['value', 'updated_at'])

    logger.info("Rating %s updated to %s", rating.id, value)
    return rating


@transaction.atomic
def delete_rating(*, rating_id: UUID, user: User) -> None:
    """
    Delete a rating.

    Only the rating's author can delete it.

    Raises:
        RatingNotFoundError: If rating doesn't exist
        UnauthorizedRatingActionError: If user is not the author
    """
    try:
        rating = (
            Rating.objects
            .select_for_update()
            .get(id=rating_id)
        )
    except Rating.DoesNotExist:
        raise RatingNotFoundError("Rating not found")

    if rating.user_id != user.id:
        raise UnauthorizedRatingActionError("You can only delete your own ratings")

    rating.delete()
    logger.info("Rating %s deleted by user %s", rating_id, user.id)


def ratings_for_store(*, store_id: UUID) -> QuerySet[Rating]:
    """
    All ratings of a store, newest first.

    Raises:
        StoreNotFoundError: If store doesn't exist
    """
    if not Store.objects.filter(id=store_id).exists():
        raise StoreNotFoundError("Store not found")

    return (
        Rating.objects
        .filter(store_id=store_id)
        .select_related('user')
        .order_by('-created_at')
    )


def get_user_rating_for_store(*, user_id: UUID, store_id: UUID) -> Optional[Rating]:
    """The rating ``user_id`` gave ``store_id``, or None."""
    return Rating.objects.filter(user_id=user_id, store_id=store_id).first()


def list_ratings(
    *,
    store_id: Optional[UUID] = None,
    user_id: Optional[UUID] = None,
    value: Optional[int] = None
) -> QuerySet[Rating]:
    """
    Every rating on the platform, newest first, with optional filters.

    Args:
        store_id: Only ratings of this store
        user_id: Only ratings by this user
        value: Only ratings with this exact score
    """
    queryset = Rating.objects.select_related('user', 'store')

    if store_id:
        queryset = queryset.filter(store_id=store_id)

    if user_id:
        queryset = queryset.filter(user_id=user_id)

    if value:
        queryset = queryset.filter(value=value)

    return queryset.order_by('-created_at')
