"""
Dashboard statistics.

Read-only summaries for the two dashboards. Every average goes through
``apps.ratings.services.average_of`` so the dashboards round exactly like
the store listings do.
"""

from apps.accounts.models import User, UserRole
from apps.ratings.models import Rating
from apps.ratings.services import average_of, summarize_ratings
from apps.stores.models import Store
from apps.stores.services import get_store_for_owner

RECENT_RATINGS_LIMIT = 5


def get_admin_dashboard() -> dict:
    """
    Platform-wide totals for administrators.

    Returns:
        Dict with user/store/rating totals, user counts per role, the
        platform-wide average rating and the most recent ratings.

    Example:
        >>> get_admin_dashboard()['total_users']
        9
    """
    values = list(Rating.objects.values_list('value', flat=True))

    recent = (
        Rating.objects
        .select_related('user', 'store')
        .order_by('-created_at')[:RECENT_RATINGS_LIMIT]
    )

    return {
        'total_users': User.objects.count(),
        'total_stores': Store.objects.count(),
        'total_ratings': len(values),
        'admin_users': User.objects.filter(role=UserRole.ADMIN).count(),
        'normal_users': User.objects.filter(role=UserRole.USER).count(),
        'store_owners': User.objects.filter(role=UserRole.STORE_OWNER).count(),
        'average_rating': average_of(values),
        'recent_ratings': list(recent),
    }


def get_store_owner_dashboard(*, user: User) -> dict:
    """
    The owner's store with its rating statistics.

    Args:
        user: The store owner

    Returns:
        Dict with ``store``, ``rating_stats`` (average, count, 1-5
        distribution) and the store's most recent ratings.

    Raises:
        StoreNotFoundError: If the user owns no store
    """
    store = get_store_for_owner(user=user)

    ratings = list(
        store.ratings
        .select_related('user')
        .order_by('-created_at')
    )

    return {
        'store': store,
        'rating_stats': summarize_ratings(rating.value for rating in ratings),
        'recent_ratings': ratings[:RECENT_RATINGS_LIMIT],
    }
