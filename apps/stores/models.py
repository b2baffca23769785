from django.db import models
import uuid


class Store(models.Model):
    """A rateable store, optionally owned by one user."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=60, db_index=True)
    email = models.EmailField(unique=True, max_length=255)
    address = models.CharField(max_length=400)
    # One store per owner; the owner's role is kept in step by services.ownership
    owner = models.OneToOneField(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='owned_store',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    
    class Meta:
        db_table = 'stores'
        indexes = [
            models.Index(fields=['address'], name='stores_address_idx'),
            models.Index(fields=['created_at'], name='stores_created_at_idx'),
        ]
        ordering = ['name']
    
    def __str__(self):
        return self.name
