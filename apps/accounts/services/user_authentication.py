"""Login and password changes for existing accounts."""

import logging
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from .exceptions import (
    InvalidCredentialsError,
    InactiveAccountError,
    UserNotFoundError,
)

User = get_user_model()
logger = logging.getLogger(__name__)

# Same message for unknown email and wrong password, so logins can't be
# used to probe which emails are registered.
INVALID_CREDENTIALS = "Invalid credentials"


def authenticate_user(*, email: str, password: str) -> User:
    """
    Check an email/password pair and record the login.

    Args:
        email: Account email, matched case-insensitively
        password: Raw password

    Returns:
        The authenticated User

    Raises:
        InvalidCredentialsError: Unknown email or wrong password
        InactiveAccountError: Correct password on a deactivated account
    """
    user = User.objects.filter(email__iexact=email.strip()).first()

    if user is None or not user.check_password(password):
        logger.info("Failed login for %s", email)
        raise InvalidCredentialsError(INVALID_CREDENTIALS)

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    login_time = timezone.now()
    User.objects.filter(pk=user.pk).update(last_login=login_time)
    user.last_login = login_time

    return user


@transaction.atomic
def change_password(*, user_id: UUID, new_password: str) -> None:
    """
    Replace the password of an existing account.

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

    user.set_password(new_password)
    user.save(update_fields=['password', 'updated_at'])
    logger.info("Password changed for user %s", user.id)
