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
def owner_a(db):
    """A plain user who will be made a store owner."""
    return User.objects.create_user(
        email='owner.a@example.com',
        password='OwnerPass1!',
        name='First Owner Account',
    )


@pytest.fixture
def owner_b(db):
    """A second plain user."""
    return User.objects.create_user(
        email='owner.b@example.com',
        password='OwnerPass1!',
        name='Second Owner Account',
    )


@pytest.fixture
def rater(db):
    """A normal user who rates stores."""
    return User.objects.create_user(
        email='rater@example.com',
        password='RaterPass1!',
        name='Regular Rater Account',
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
def store(db):
    """A store without an owner."""
    return create_store(
        name='Riverside Grocery Market',
        email='riverside@example.com',
        address='10 River Road, Springfield',
    )


@pytest.fixture
def owned_store(db, owner_a):
    """A store owned by ``owner_a``."""
    store = create_store(
        name='Hilltop General Store',
        email='hilltop@example.com',
        address='20 Hill Street, Shelbyville',
        owner_id=owner_a.id,
    )
    owner_a.refresh_from_db()
    return store


@pytest.fixture
def rater_client(rater):
    """API client authenticated as ``rater``."""
    return _client_for(rater)


@pytest.fixture
def admin_auth_client(site_admin):
    """API client authenticated as the administrator."""
    return _client_for(site_admin)
