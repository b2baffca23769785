from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator
import uuid

MIN_RATING = 1
MAX_RATING = 5


class Rating(models.Model):
    """One user's 1-5 score for one store."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    store = models.ForeignKey('stores.Store', on_delete=models.CASCADE, related_name='ratings')
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='ratings')
    value = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(MIN_RATING), MaxValueValidator(MAX_RATING)]
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    
    class Meta:
        db_table = 'ratings'
        constraints = [
            models.UniqueConstraint(fields=['user', 'store'], name='unique_rating_per_user_store'),
            models.CheckConstraint(
                condition=models.Q(value__gte=MIN_RATING) & models.Q(value__lte=MAX_RATING),
                name='rating_value_between_1_and_5',
            ),
        ]
        indexes = [
            models.Index(fields=['store', 'created_at'], name='ratings_store_created_idx'),
            models.Index(fields=['user', 'created_at'], name='ratings_user_created_idx'),
        ]
        ordering = ['-created_at']
    
    def __str__(self):
        return f"{self.user} - {self.store} ({self.value}★)"
