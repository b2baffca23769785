from rest_framework import serializers
from apps.ratings.serializers import RatingSerializer, StoreRatingSerializer


class AdminDashboardSerializer(serializers.Serializer):
    """Response serializer for the admin dashboard."""
    total_users = serializers.IntegerField()
    total_stores = serializers.IntegerField()
    total_ratings = serializers.IntegerField()
    admin_users = serializers.IntegerField()
    normal_users = serializers.IntegerField()
    store_owners = serializers.IntegerField()
    average_rating = serializers.FloatField()
    recent_ratings = RatingSerializer(many=True)


class DashboardStoreSerializer(serializers.Serializer):
    """The owner's store, without nested ratings."""
    id = serializers.UUIDField()
    name = serializers.CharField()
    email = serializers.EmailField()
    address = serializers.CharField()


class RatingStatsSerializer(serializers.Serializer):
    """Average, count and 1-5 distribution of a store's ratings."""
    average_rating = serializers.FloatField()
    rating_count = serializers.IntegerField()
    distribution = serializers.SerializerMethodField()

    def get_distribution(self, obj):
        return {str(value): count for value, count in obj['distribution'].items()}


class StoreOwnerDashboardSerializer(serializers.Serializer):
    """Response serializer for the store-owner dashboard."""
    store = DashboardStoreSerializer()
    rating_stats = RatingStatsSerializer()
    recent_ratings = StoreRatingSerializer(many=True)


class ErrorSerializer(serializers.Serializer):
    """Standard error response serializer."""
    error = serializers.CharField()
