import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.ratings.services import submit_rating
from apps.stores.services import create_store


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def site_admin(db):
    return User.objects.create_user(
        email='admin@example.com',
        password='AdminPass1!',
        name='Site Administrator',
        role=UserRole.ADMIN,
    )


@pytest.fixture
def store_owner(db):
    """A user who owns ``owner_store`` once that fixture runs."""
    return User.objects.create_user(
        email='owner@example.com',
        password='OwnerPass1!',
        name='Dashboard Store Owner',
    )


@pytest.fixture
def raters(db):
    return [
        User.objects.create_user(
            email=f'rater{i}@example.com',
            password='RaterPass1!',
            name=f'Dashboard Rater {i}',
        )
        for i in range(1, 4)
    ]


@pytest.fixture
def owner_store(db, store_owner):
    store = create_store(
        name='Dashboard Test Emporium',
        email='emporium@example.com',
        address='8 Dashboard Drive',
        owner_id=store_owner.id,
    )
    store_owner.refresh_from_db()
    return store


@pytest.fixture
def rated_owner_store(owner_store, raters):
    """``owner_store`` rated 2, 4 and 4."""
    for rater, value in zip(raters, (2, 4, 4)):
        submit_rating(user=rater, store_id=owner_store.id, value=value)
    return owner_store


@pytest.fixture
def admin_auth_client(site_admin):
    return _client_for(site_admin)


@pytest.fixture
def owner_client(store_owner):
    return _client_for(store_owner)


@pytest.fixture
def rater_client(raters):
    return _client_for(raters[0])
