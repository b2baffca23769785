"""
Dashboard services - read-only summaries for the admin and store-owner
dashboards.
"""

from .dashboard_stats import (
    get_admin_dashboard,
    get_store_owner_dashboard,
    RECENT_RATINGS_LIMIT,
)

__all__ = [
    'get_admin_dashboard',
    'get_store_owner_dashboard',
    'RECENT_RATINGS_LIMIT',
]
