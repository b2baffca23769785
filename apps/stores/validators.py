from django.core.exceptions import ValidationError

STORE_NAME_MIN_LENGTH = 20
STORE_NAME_MAX_LENGTH = 60


def validate_store_name(value):
    if not (STORE_NAME_MIN_LENGTH <= len(value) <= STORE_NAME_MAX_LENGTH):
        raise ValidationError(
            f"Store name must be between {STORE_NAME_MIN_LENGTH} and {STORE_NAME_MAX_LENGTH} characters"
        )
