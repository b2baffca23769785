from rest_framework import serializers
from apps.accounts.models import User
from apps.stores.models import Store
from .models import Rating, MIN_RATING, MAX_RATING


class RatingUserSerializer(serializers.ModelSerializer):
    """Minimal user info for nested serialization."""

    class Meta:
        model = User
        fields = ['id', 'name', 'email']
        read_only_fields = fields


class RatingStoreSerializer(serializers.ModelSerializer):
    """Minimal store info for nested serialization."""

    class Meta:
        model = Store
        fields = ['id', 'name', 'address']
        read_only_fields = fields


class RatingSerializer(serializers.ModelSerializer):
    """Main rating serializer."""

    user = RatingUserSerializer(read_only=True)
    store = RatingStoreSerializer(read_only=True)

    class Meta:
        model = Rating
        fields = ['id', 'value', 'user', 'store', 'created_at', 'updated_at']
        read_only_fields = fields


class StoreRatingSerializer(serializers.ModelSerializer):
    """Rating as listed under its store: author only."""

    user = RatingUserSerializer(read_only=True)

    class Meta:
        model = Rating
        fields = ['id', 'value', 'user', 'created_at', 'updated_at']
        read_only_fields = fields


class RatingCreateSerializer(serializers.Serializer):
    """Serializer for submitting a rating."""

    store_id = serializers.UUIDField()
    value = serializers.IntegerField(min_value=MIN_RATING, max_value=MAX_RATING)


class RatingUpdateSerializer(serializers.Serializer):
    """Serializer for changing a rating's value."""

    value = serializers.IntegerField(min_value=MIN_RATING, max_value=MAX_RATING)


class RatingFilterSerializer(serializers.Serializer):
    """Query parameters accepted by the admin rating listing."""

    store = serializers.UUIDField(required=False)
    user = serializers.UUIDField(required=False)
    value = serializers.IntegerField(required=False, min_value=MIN_RATING, max_value=MAX_RATING)
