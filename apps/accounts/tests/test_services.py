"""
Service layer tests for accounts app.

Covers registration, authentication, password change and the admin user
directory, including the role rules tied to store ownership.
"""

import pytest
from uuid import uuid4

from apps.accounts.models import User, UserRole
from apps.accounts.services import (
    register_user,
    authenticate_user,
    change_password,
    create_user,
    get_user_by_id,
    list_users,
    update_user,
    delete_user,
)
from apps.accounts.services.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    InactiveAccountError,
    UserNotFoundError,
    InvalidRoleError,
)
from apps.ratings.models import Rating
from apps.ratings.services import submit_rating
from apps.stores.models import Store


# ============================================================================
# REGISTRATION & AUTHENTICATION
# ============================================================================

@pytest.mark.django_db
class TestRegistration:
    """Test self-service sign up."""

    def test_register_user_success(self):
        user = register_user(
            name='Brand New Person',
            email='new@example.com',
            password='NewPass1!',
            address='5 New Road',
        )

        assert user.role == UserRole.USER
        assert user.check_password('NewPass1!')
        assert user.address == '5 New Road'

    def test_register_duplicate_email_case_insensitive(self, user):
        with pytest.raises(DuplicateEmailError):
            register_user(
                name='Someone Else Here',
                email='TESTUSER@example.com',
                password='NewPass1!',
            )

        assert User.objects.count() == 1


@pytest.mark.django_db
class TestAuthentication:
    """Test login and password change."""

    def test_authenticate_success_sets_last_login(self, user):
        assert user.last_login is None

        authenticated = authenticate_user(email='testuser@example.com', password='TestPass1!')

        assert authenticated.id == user.id
        assert authenticated.last_login is not None

    def test_authenticate_wrong_password(self, user):
        with pytest.raises(InvalidCredentialsError):
            authenticate_user(email='testuser@example.com', password='WrongPass1!')

    def test_authenticate_unknown_email(self, db):
        with pytest.raises(InvalidCredentialsError):
            authenticate_user(email='nobody@example.com', password='TestPass1!')

    def test_authenticate_inactive(self, user_inactive):
        with pytest.raises(InactiveAccountError):
            authenticate_user(email='inactive@example.com', password='TestPass1!')

    def test_change_password(self, user):
        change_password(user_id=user.id, new_password='Changed1!')

        user.refresh_from_db()
        assert user.check_password('Changed1!')
        assert not user.check_password('TestPass1!')


# ============================================================================
# USER DIRECTORY
# ============================================================================

@pytest.mark.django_db
class TestCreateUser:
    """Test admin-side user creation."""

    def test_create_admin(self, db):
        admin = create_user(
            name='Second Administrator',
            email='admin2@example.com',
            password='AdminPass1!',
            role=UserRole.ADMIN,
        )

        assert admin.role == UserRole.ADMIN

    def test_create_store_owner_rejected(self, db):
        with pytest.raises(InvalidRoleError):
            create_user(
                name='Would Be Owner',
                email='owner@example.com',
                password='OwnerPass1!',
                role=UserRole.STORE_OWNER,
            )

        assert not User.objects.filter(email='owner@example.com').exists()

    def test_create_duplicate_email(self, user):
        with pytest.raises(DuplicateEmailError):
            create_user(
                name='Duplicate Person',
                email='testuser@example.com',
                password='TestPass1!',
            )


@pytest.mark.django_db
class TestListUsers:
    """Test filtering and sorting of the user directory."""

    def test_filter_by_role(self, user, other_user, site_admin):
        admins = list(list_users(role=UserRole.ADMIN))

        assert admins == [site_admin]

    def test_filter_by_name_case_insensitive(self, user, other_user):
        found = list(list_users(name='other'))

        assert found == [other_user]

    def test_filter_by_address(self, user, other_user):
        found = list(list_users(address='test street'))

        assert found == [user]

    def test_ordering_descending(self, user, other_user):
        names = [u.name for u in list_users(ordering='-name')]

        assert names == ['Test User Account', 'Other User Account']

    def test_unknown_ordering_falls_back_to_name(self, user, other_user):
        names = [u.name for u in list_users(ordering='password')]

        assert names == ['Other User Account', 'Test User Account']

    def test_get_user_not_found(self, db):
        with pytest.raises(UserNotFoundError):
            get_user_by_id(user_id=uuid4())


@pytest.mark.django_db
class TestUpdateUser:
    """Test profile edits and manual role changes."""

    def test_update_profile_fields(self, user):
        updated = update_user(user_id=user.id, name='Renamed User Account', address='9 New Road')

        assert updated.name == 'Renamed User Account'
        assert updated.address == '9 New Road'

    def test_update_email_taken(self, user, other_user):
        with pytest.raises(DuplicateEmailError):
            update_user(user_id=user.id, email='otheruser@example.com')

    def test_promote_to_admin(self, user):
        updated = update_user(user_id=user.id, role=UserRole.ADMIN)

        assert updated.role == UserRole.ADMIN

    def test_store_owner_role_cannot_be_set_by_hand(self, user):
        with pytest.raises(InvalidRoleError):
            update_user(user_id=user.id, role=UserRole.STORE_OWNER)

        user.refresh_from_db()
        assert user.role == UserRole.USER

    def test_owner_cannot_be_demoted_while_owning(self, owned_store, other_user):
        assert other_user.role == UserRole.STORE_OWNER

        with pytest.raises(InvalidRoleError):
            update_user(user_id=other_user.id, role=UserRole.USER)

        other_user.refresh_from_db()
        assert other_user.role == UserRole.STORE_OWNER

    def test_owner_promoted_to_admin_then_demoted_stays_owner(self, owned_store, other_user):
        update_user(user_id=other_user.id, role=UserRole.ADMIN)
        updated = update_user(user_id=other_user.id, role=UserRole.USER)

        assert updated.role == UserRole.STORE_OWNER

    def test_update_user_not_found(self, db):
        with pytest.raises(UserNotFoundError):
            update_user(user_id=uuid4(), name='Nobody At All')


@pytest.mark.django_db
class TestDeleteUser:
    """Test account deletion."""

    def test_delete_owner_leaves_store_ownerless(self, owned_store, other_user):
        delete_user(user_id=other_user.id)

        owned_store.refresh_from_db()
        assert owned_store.owner is None
        assert not User.objects.filter(id=other_user.id).exists()

    def test_delete_user_removes_their_ratings(self, user, owned_store):
        submit_rating(user=user, store_id=owned_store.id, value=4)

        delete_user(user_id=user.id)

        assert Rating.objects.count() == 0
        assert Store.objects.filter(id=owned_store.id).exists()

    def test_delete_user_not_found(self, db):
        with pytest.raises(UserNotFoundError):
            delete_user(user_id=uuid4())
