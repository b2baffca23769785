from django.contrib import admin
from .models import Rating


@admin.register(Rating)
class RatingAdmin(admin.ModelAdmin):
    """Admin interface for Ratings."""
    
    list_display = ['store', 'user', 'value', 'created_at']
    list_filter = ['value', 'created_at']
    search_fields = ['store__name', 'user__email', 'user__name']
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['store', 'user']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']
