"""
Field rules shared by registration, admin user forms and store forms.

Raised as ``django.core.exceptions.ValidationError`` so they can be used
both as model-independent serializer validators and in plain Django forms.
"""

import re

from django.core.exceptions import ValidationError

USER_NAME_MIN_LENGTH = 6
USER_NAME_MAX_LENGTH = 60
ADDRESS_MAX_LENGTH = 400

PASSWORD_PATTERN = re.compile(r'^(?=.*[A-Z])(?=.*[!@#$%^&*])[a-zA-Z0-9!@#$%^&*]{8,16}$')


def validate_user_name(value):
    if not (USER_NAME_MIN_LENGTH <= len(value) <= USER_NAME_MAX_LENGTH):
        raise ValidationError(
            f"Name must be between {USER_NAME_MIN_LENGTH} and {USER_NAME_MAX_LENGTH} characters"
        )


def validate_address(value):
    if len(value) > ADDRESS_MAX_LENGTH:
        raise ValidationError(f"Address must not exceed {ADDRESS_MAX_LENGTH} characters")


def validate_password_strength(value):
    if not PASSWORD_PATTERN.match(value or ''):
        raise ValidationError(
            "Password must be 8-16 characters with at least one uppercase "
            "letter and one special character (!@#$%^&*)"
        )
