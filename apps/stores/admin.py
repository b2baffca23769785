from django.contrib import admin
from django.db.models import Count, Avg
from .models import Store
from apps.ratings.services import round_average
from .services import create_store, update_store, delete_store


@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
    """
    Admin interface for Stores.

    Saves and deletes go through the store services so the owner's role
    follows ownership changes made here too.
    """
    
    list_display = ['name', 'email', 'owner', 'avg_rating', 'rating_count', 'created_at']
    search_fields = ['name', 'email', 'address', 'owner__email']
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['owner']
    date_hierarchy = 'created_at'
    ordering = ['name']
    
    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'email', 'address')
        }),
        ('Ownership', {
            'fields': ('owner',)
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
    
    def get_queryset(self, request):
        """Optimize query with annotation."""
        qs = super().get_queryset(request)
        return qs.select_related('owner').annotate(
            _rating_count=Count('ratings'),
            _avg_rating=Avg('ratings__value'),
        )
    
    def rating_count(self, obj):
        return obj._rating_count
    rating_count.short_description = 'Ratings'
    rating_count.admin_order_field = '_rating_count'
    
    def avg_rating(self, obj):
        if obj._avg_rating is None:
            return 0.0
        return round_average(obj._avg_rating)
    avg_rating.short_description = 'Average'
    avg_rating.admin_order_field = '_avg_rating'
    
    def save_model(self, request, obj, form, change):
        if not change:
            created = create_store(
                name=obj.name,
                email=obj.email,
                address=obj.address,
                owner_id=obj.owner_id,
            )
            obj.pk = created.pk
            return

        update_store(
            store_id=obj.pk,
            name=obj.name,
            email=obj.email,
            address=obj.address,
            owner_id=obj.owner_id,
            clear_owner=obj.owner_id is None,
        )
    
    def delete_model(self, request, obj):
        delete_store(store_id=obj.pk)
    
    def delete_queryset(self, request, queryset):
        for store_id in queryset.values_list('id', flat=True):
            delete_store(store_id=store_id)
