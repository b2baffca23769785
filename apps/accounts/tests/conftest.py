import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
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
def user(db):
    """Create and return a normal user."""
    return User.objects.create_user(
        email='testuser@example.com',
        password='TestPass1!',
        name='Test User Account',
        address='1 Test Street',
    )


@pytest.fixture
def other_user(db):
    """Create and return another normal user."""
    return User.objects.create_user(
        email='otheruser@example.com',
        password='OtherPass1!',
        name='Other User Account',
        address='2 Other Street',
    )


@pytest.fixture
def user_inactive(db):
    """Create and return an inactive user."""
    return User.objects.create_user(
        email='inactive@example.com',
        password='TestPass1!',
        name='Inactive User Account',
        is_active=False,
    )


@pytest.fixture
def site_admin(db):
    """Create and return an administrator."""
    return User.objects.create_user(
        email='admin@example.com',
        password='AdminPass1!',
        name='Site Administrator',
        role=UserRole.ADMIN,
    )


@pytest.fixture
def owned_store(db, other_user):
    """A store owned by ``other_user`` (who becomes a store owner)."""
    store = create_store(
        name='Corner Shop On Main Street',
        email='corner@example.com',
        address='3 Main Street',
        owner_id=other_user.id,
    )
    other_user.refresh_from_db()
    return store


@pytest.fixture
def authenticated_client(user):
    """Return an API client authenticated as ``user`` using JWT."""
    return _client_for(user)


@pytest.fixture
def admin_auth_client(site_admin):
    """Return an API client authenticated as the administrator."""
    return _client_for(site_admin)
