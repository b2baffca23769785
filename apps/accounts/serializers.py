from rest_framework import serializers
from .models import User, UserRole
from .validators import (
    validate_user_name,
    validate_address,
    validate_password_strength,
)
from apps.ratings.services import average_of


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display."""
    
    class Meta:
        model = User
        fields = [
            'id',
            'name',
            'email',
            'address',
            'role',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class UserRegistrationSerializer(serializers.Serializer):
    """Serializer for user registration."""
    
    name = serializers.CharField(validators=[validate_user_name])
    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        validators=[validate_password_strength],
        style={'input_type': 'password'}
    )
    address = serializers.CharField(validators=[validate_address])


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""
    
    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class PasswordUpdateSerializer(serializers.Serializer):
    """Serializer for changing the current user's password."""
    
    password = serializers.CharField(
        required=True,
        validators=[validate_password_strength],
        style={'input_type': 'password'}
    )


class OwnedStoreSerializer(serializers.Serializer):
    """Minimal info about the store a user owns."""
    
    id = serializers.UUIDField(read_only=True)
    name = serializers.CharField(read_only=True)


class AdminUserSerializer(serializers.ModelSerializer):
    """
    User as seen by administrators.

    Store owners carry their store and its average rating.
    """
    
    store = serializers.SerializerMethodField()
    rating = serializers.SerializerMethodField()
    
    class Meta:
        model = User
        fields = [
            'id',
            'name',
            'email',
            'address',
            'role',
            'store',
            'rating',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields
    
    def _owned_store(self, obj):
        return getattr(obj, 'owned_store', None)
    
    def get_store(self, obj):
        store = self._owned_store(obj)
        if store is None:
            return None
        return OwnedStoreSerializer(store).data
    
    def get_rating(self, obj):
        store = self._owned_store(obj)
        if store is None:
            return None
        return average_of(rating.value for rating in store.ratings.all())


class AdminUserCreateSerializer(serializers.Serializer):
    """Serializer for admin-side user creation."""
    
    name = serializers.CharField(validators=[validate_user_name])
    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        validators=[validate_password_strength],
        style={'input_type': 'password'}
    )
    address = serializers.CharField(validators=[validate_address])
    role = serializers.ChoiceField(choices=UserRole.choices, default=UserRole.USER)


class AdminUserUpdateSerializer(serializers.Serializer):
    """Serializer for admin-side user edits; every field optional."""
    
    name = serializers.CharField(required=False, validators=[validate_user_name])
    email = serializers.EmailField(required=False)
    address = serializers.CharField(required=False, validators=[validate_address])
    role = serializers.ChoiceField(choices=UserRole.choices, required=False)
