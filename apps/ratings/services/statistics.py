"""Statistics service - store rating summaries built on the aggregation engine."""

from uuid import UUID

from apps.stores.models import Store
from .aggregation import summarize_ratings
from .rating_ledger import ratings_for_store


def get_store_statistics(*, store_id: UUID) -> dict:
    """
    Average, count and 1-5 distribution of a store's ratings.

    Recomputed from the full rating list on every call.

    Raises:
        StoreNotFoundError: If store doesn't exist

    Example:
        >>> get_store_statistics(store_id=store.id)
        {'average_rating': 3.3, 'rating_count': 3, 'distribution': {1: 0, 2: 1, 3: 0, 4: 2, 5: 0}}
    """
    values = ratings_for_store(store_id=store_id).values_list('value', flat=True)
    return summarize_ratings(values)


def summarize_store(store: Store) -> dict:
    """
    Summary for a store instance.

    Uses ``store.ratings.all()`` so a ``prefetch_related('ratings')`` on the
    caller's queryset is honoured.
    """
    return summarize_ratings(rating.value for rating in store.ratings.all())
