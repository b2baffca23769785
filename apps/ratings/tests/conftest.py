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
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def rating_user(db):
    """Create and return a user who rates stores."""
    return User.objects.create_user(
        email='rater@example.com',
        password='RaterPass1!',
        name='Regular Rater Account',
    )


@pytest.fixture
def rating_other_user(db):
    """Create and return another rating user."""
    return User.objects.create_user(
        email='rater.two@example.com',
        password='RaterPass1!',
        name='Second Rater Account',
    )


@pytest.fixture
def site_admin(db):
    """An administrator."""
    return User.objects.create_user(
        email='admin@example.com',
        password='AdminPass1!',
        name='Site Administrator',
        role=UserRole.ADMIN,
    )


@pytest.fixture
def rated_store(db):
    """A store to be rated."""
    return create_store(
        name='Harbour Fish Market Hall',
        email='harbour@example.com',
        address='1 Harbour Front',
    )


@pytest.fixture
def other_store(db):
    """A second store."""
    return create_store(
        name='Uptown Hardware Supplies',
        email='hardware@example.com',
        address='2 Uptown Avenue',
    )


@pytest.fixture
def rating(db, rating_user, rated_store):
    """``rating_user``'s 4-star rating of ``rated_store``."""
    return submit_rating(user=rating_user, store_id=rated_store.id, value=4)


@pytest.fixture
def rating_auth_client(rating_user):
    """API client authenticated as ``rating_user``."""
    return _client_for(rating_user)


@pytest.fixture
def rating_other_client(rating_other_user):
    """API client authenticated as ``rating_other_user``."""
    return _client_for(rating_other_user)


@pytest.fixture
def admin_auth_client(site_admin):
    """API client authenticated as the administrator."""
    return _client_for(site_admin)
