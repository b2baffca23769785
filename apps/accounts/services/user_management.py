"""
User directory service - admin-side account management.

Role changes made here are limited to ADMIN and USER. STORE_OWNER is
derived from store ownership and only ever written by
``apps.stores.services.ownership``.
"""

import logging
from typing import Optional
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.accounts.models import UserRole
from apps.stores.models import Store
from apps.stores.services import ownership
from .exceptions import (
    DuplicateEmailError,
    UserNotFoundError,
    InvalidRoleError,
)

User = get_user_model()
logger = logging.getLogger(__name__)

USER_ORDERING_FIELDS = ('name', 'email', 'address', 'role', 'created_at')

ASSIGNABLE_ROLES = (UserRole.ADMIN, UserRole.USER)


def _validate_assignable_role(role: str) -> None:
    if role == UserRole.STORE_OWNER:
        raise InvalidRoleError(
            "The store owner role is assigned by making the user the owner of a store"
        )
    if role not in ASSIGNABLE_ROLES:
        raise InvalidRoleError(f"Invalid role. Must be one of: {list(ASSIGNABLE_ROLES)}")


@transaction.atomic
def create_user(
    *,
    name: str,
    email: str,
    password: str,
    address: str = '',
    role: str = UserRole.USER
) -> User:
    """
    Create an account on behalf of an administrator.

    Args:
        name: Full name
        email: Unique email address
        password: Raw password (hashed on save)
        address: Postal address
        role: ADMIN or USER

    Returns:
        Created User instance

    Raises:
        InvalidRoleError: If role is STORE_OWNER or unknown
        DuplicateEmailError: If the email is already registered
    """
    _validate_assignable_role(role)

    email = User.objects.normalize_email(email)
    if User.objects.filter(email__iexact=email).exists():
        raise DuplicateEmailError("User already exists with this email")

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                name=name,
                address=address,
                role=role,
            )
    except IntegrityError:
        raise DuplicateEmailError("User already exists with this email")

    logger.info("Admin created user %s with role %s", user.id, role)
    return user


def get_user_by_id(*, user_id: UUID) -> User:
    """
    Retrieve a user with their owned store (if any) preloaded.

    Raises:
        UserNotFoundError: If user doesn't exist
    """
    try:
        return (
            User.objects
            .select_related('owned_store')
            .prefetch_related('owned_store__ratings')
            .get(id=user_id)
        )
    except User.DoesNotExist:
        raise UserNotFoundError("User not found")


def list_users(
    *,
    name: Optional[str] = None,
    email: Optional[str] = None,
    address: Optional[str] = None,
    role: Optional[str] = None,
    ordering: Optional[str] = None
) -> QuerySet[User]:
    """
    Filter and sort the user directory.

    Text filters are case-insensitive substring matches. ``ordering`` accepts
    one of USER_ORDERING_FIELDS, optionally prefixed with '-'; anything else
    falls back to name order.
    """
    queryset = (
        User.objects
        .select_related('owned_store')
        .prefetch_related('owned_store__ratings')
    )

    if name:
        queryset = queryset.filter(name__icontains=name)

    if email:
        queryset = queryset.filter(email__icontains=email)

    if address:
        queryset = queryset.filter(address__icontains=address)

    if role:
        queryset = queryset.filter(role=role)

    if not ordering or ordering.lstrip('-') not in USER_ORDERING_FIELDS:
        ordering = 'name'

    return queryset.order_by(ordering, 'id')


@transaction.atomic
def update_user(
    *,
    user_id: UUID,
    name: Optional[str] = None,
    email: Optional[str] = None,
    address: Optional[str] = None,
    role: Optional[str] = None
) -> User:
    """
    Update profile fields and/or the role of an account.

    A non-admin who owns a store keeps STORE_OWNER; asking for USER is
    refused. Promoting a store owner to ADMIN is allowed and sticks, since
    ownership events never touch an ADMIN. Demoting an ADMIN who owns a
    store lands on STORE_OWNER.

    Raises:
        UserNotFoundError: If user doesn't exist
        DuplicateEmailError: If email is taken by another account
        InvalidRoleError: If the role change is not allowed
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(id=user_id)
        )
    except User.DoesNotExist:
        raise UserNotFoundError("User not found")

    update_fields = []

    if email is not None:
        email = User.objects.normalize_email(email)
        if email.lower() != user.email.lower():
            if User.objects.filter(email__iexact=email).exclude(id=user.id).exists():
                raise DuplicateEmailError("Email is already taken")
        user.email = email
        update_fields.append('email')

    if name is not None:
        user.name = name
        update_fields.append('name')

    if address is not None:
        user.address = address
        update_fields.append('address')

    if role is not None and role != user.role:
        _validate_assignable_role(role)
        owns_store = Store.objects.filter(owner=user).exists()

        if role == UserRole.USER and owns_store:
            if not user.is_admin:
                raise InvalidRoleError(
                    "User owns a store; reassign or delete the store to change their role"
                )
            # An admin giving up admin rights while owning a store is a store owner.
            role = UserRole.STORE_OWNER

        user.role = role
        update_fields.append('role')

    if update_fields:
        update_fields.append('updated_at')
        try:
            with transaction.atomic():
                user.save(update_fields=update_fields)
        except IntegrityError:
            raise DuplicateEmailError("Email is already taken")

    return user


@transaction.atomic
def delete_user(*, user_id: UUID) -> None:
    """
    Delete an account.

    A store owned by the user is left ownerless rather than deleted; the
    user's ratings are removed with them.

    Raises:
        UserNotFoundError: If user doesn't exist
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(id=user_id)
        )
    except User.DoesNotExist:
        raise UserNotFoundError("User not found")

    ownership.release_owned_store(user=user)

    user.delete()
    logger.info("Deleted user %s", user_id)
