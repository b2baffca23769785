from rest_framework import serializers
from .models import Store
from .validators import validate_store_name
from apps.accounts.models import User
from apps.accounts.validators import validate_address
from apps.ratings.services import summarize_store


class StoreOwnerSerializer(serializers.ModelSerializer):
    """Minimal owner info for nested serialization."""
    
    class Meta:
        model = User
        fields = ['id', 'name', 'email']
        read_only_fields = fields


class StoreSerializer(serializers.ModelSerializer):
    """
    Store with its aggregate score.

    Expects ``ratings`` to be prefetched; see ``list_stores``.
    """
    
    owner = StoreOwnerSerializer(read_only=True)
    rating = serializers.SerializerMethodField()
    rating_count = serializers.SerializerMethodField()
    
    class Meta:
        model = Store
        fields = [
            'id',
            'name',
            'email',
            'address',
            'owner',
            'rating',
            'rating_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields
    
    def _summary(self, obj):
        # Computed once per instance and reused by both fields
        cache = self.context.setdefault('_summaries', {})
        if obj.pk not in cache:
            cache[obj.pk] = summarize_store(obj)
        return cache[obj.pk]
    
    def get_rating(self, obj):
        return self._summary(obj)['average_rating']
    
    def get_rating_count(self, obj):
        return self._summary(obj)['rating_count']


class StoreWithUserRatingSerializer(StoreSerializer):
    """Store plus the requesting user's own rating of it."""
    
    user_rating = serializers.SerializerMethodField()
    user_rating_id = serializers.SerializerMethodField()
    
    class Meta(StoreSerializer.Meta):
        fields = StoreSerializer.Meta.fields + ['user_rating', 'user_rating_id']
        read_only_fields = fields
    
    def _user_rating(self, obj):
        user_id = self.context['request'].user.id
        for rating in obj.ratings.all():
            if rating.user_id == user_id:
                return rating
        return None
    
    def get_user_rating(self, obj):
        rating = self._user_rating(obj)
        return rating.value if rating else None
    
    def get_user_rating_id(self, obj):
        rating = self._user_rating(obj)
        return rating.id if rating else None


class StoreCreateSerializer(serializers.Serializer):
    """Serializer for store creation (admin)."""
    
    name = serializers.CharField(validators=[validate_store_name])
    email = serializers.EmailField()
    address = serializers.CharField(validators=[validate_address])
    owner_id = serializers.UUIDField(required=False, allow_null=True)


class StoreUpdateSerializer(serializers.Serializer):
    """
    Serializer for store edits (admin).

    Sending ``owner_id: null`` removes the current owner; omitting the key
    leaves ownership unchanged.
    """
    
    name = serializers.CharField(required=False, validators=[validate_store_name])
    email = serializers.EmailField(required=False)
    address = serializers.CharField(required=False, validators=[validate_address])
    owner_id = serializers.UUIDField(required=False, allow_null=True)


class RatingDistributionSerializer(serializers.Serializer):
    """Count per score, keys 1-5."""
    
    def to_representation(self, instance):
        return {str(score): count for score, count in instance.items()}


class StoreStatisticsSerializer(serializers.Serializer):
    """Aggregate statistics for a store."""
    
    average_rating = serializers.FloatField()
    rating_count = serializers.IntegerField()
    distribution = RatingDistributionSerializer()
