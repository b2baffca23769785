"""User registration service."""

import logging

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from apps.accounts.models import UserRole
from .exceptions import DuplicateEmailError

User = get_user_model()
logger = logging.getLogger(__name__)


@transaction.atomic
def register_user(
    *,
    name: str,
    email: str,
    password: str,
    address: str = ""
) -> User:
    """
    Self-service sign up. Always creates a plain USER account.

    Args:
        name: Full name
        email: User's email address
        password: User's password (will be hashed)
        address: Postal address

    Returns:
        Created User instance

    Raises:
        DuplicateEmailError: If the email is already registered
    """
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
                role=UserRole.USER,
            )
    except IntegrityError:
        raise DuplicateEmailError("User already exists with this email")

    logger.info("Registered user %s", user.id)
    return user
