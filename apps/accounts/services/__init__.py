"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    DuplicateEmailError,
    InvalidCredentialsError,
    InactiveAccountError,
    UserNotFoundError,
    InvalidRoleError,
)
from .user_registration import register_user
from .user_authentication import authenticate_user, change_password
from .user_management import (
    create_user,
    get_user_by_id,
    list_users,
    update_user,
    delete_user,
)

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'DuplicateEmailError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'UserNotFoundError',
    'InvalidRoleError',
    # Services
    'register_user',
    'authenticate_user',
    'change_password',
    'create_user',
    'get_user_by_id',
    'list_users',
    'update_user',
    'delete_user',
]
