import pytest
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient
from apps.dashboard.services import get_admin_dashboard, get_store_owner_dashboard
from apps.stores.services import update_store
from apps.stores.services.exceptions import StoreNotFoundError


@pytest.mark.django_db
class TestDashboardServices:
    """Dashboard numbers come from the aggregation engine."""

    def test_admin_dashboard_totals(self, site_admin, rated_owner_store):
        data = get_admin_dashboard()

        assert data['total_users'] == 5
        assert data['total_stores'] == 1
        assert data['total_ratings'] == 3
        assert data['admin_users'] == 1
        assert data['normal_users'] == 3
        assert data['store_owners'] == 1
        assert data['average_rating'] == 3.3
        assert len(data['recent_ratings']) == 3

    def test_admin_dashboard_empty_platform(self, db):
        data = get_admin_dashboard()

        assert data['total_ratings'] == 0
        assert data['average_rating'] == 0.0
        assert data['recent_ratings'] == []

    def test_store_owner_dashboard(self, store_owner, rated_owner_store):
        data = get_store_owner_dashboard(user=store_owner)

        assert data['store'] == rated_owner_store
        assert data['rating_stats'] == {
            'average_rating': 3.3,
            'rating_count': 3,
            'distribution': {1: 0, 2: 1, 3: 0, 4: 2, 5: 0},
        }

    def test_store_owner_dashboard_without_store(self, raters):
        with pytest.raises(StoreNotFoundError):
            get_store_owner_dashboard(user=raters[0])


@pytest.mark.django_db
class TestAdminDashboardAPI:
    """Tests for GET /api/dashboard/admin/"""

    def test_admin_dashboard(self, admin_auth_client, rated_owner_store):
        response = admin_auth_client.get(reverse('dashboard:admin-dashboard'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_ratings'] == 3
        assert response.data['average_rating'] == 3.3
        assert len(response.data['recent_ratings']) == 3

    def test_admin_dashboard_forbidden_for_owner(self, owner_client, owner_store):
        response = owner_client.get(reverse('dashboard:admin-dashboard'))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_admin_dashboard_unauthenticated(self, db):
        response = APIClient().get(reverse('dashboard:admin-dashboard'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestStoreOwnerDashboardAPI:
    """Tests for GET /api/dashboard/store-owner/"""

    def test_owner_dashboard(self, owner_client, rated_owner_store):
        response = owner_client.get(reverse('dashboard:store-owner-dashboard'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['store']['name'] == 'Dashboard Test Emporium'
        assert response.data['rating_stats']['average_rating'] == 3.3
        assert response.data['rating_stats']['rating_count'] == 3
        assert response.data['rating_stats']['distribution'] == {
            '1': 0, '2': 1, '3': 0, '4': 2, '5': 0,
        }
        assert len(response.data['recent_ratings']) == 3

    def test_normal_user_forbidden(self, rater_client, owner_store):
        response = rater_client.get(reverse('dashboard:store-owner-dashboard'))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_former_owner_loses_access(self, owner_client, owner_store):
        update_store(store_id=owner_store.id, clear_owner=True)

        response = owner_client.get(reverse('dashboard:store-owner-dashboard'))

        assert response.status_code == status.HTTP_403_FORBIDDEN
