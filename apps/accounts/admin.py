from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import User, UserRole
from .services import delete_user


ROLE_COLORS = {
    UserRole.ADMIN: '#A47449',
    UserRole.STORE_OWNER: '#6B8E5E',
    UserRole.USER: '#999999',
}


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for User model.

    The role is read-only here: STORE_OWNER follows store ownership and is
    maintained by the stores app. Deletion goes through the accounts
    service so an owned store is left ownerless rather than orphaning the
    owner's role.
    """

    list_display = [
        'email',
        'name',
        'role_badge',
        'is_active',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'role',
        'is_active',
        'is_staff',
        'created_at',
    ]

    search_fields = [
        'email',
        'name',
        'address',
    ]

    ordering = ['name']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'email', 'address', 'password')
        }),
        ('Role', {
            'fields': ('role',),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'name', 'address', 'password1', 'password2'),
        }),
    )

    readonly_fields = [
        'role',
        'created_at',
        'updated_at',
        'last_login',
    ]

    filter_horizontal = ['groups', 'user_permissions']

    def role_badge(self, obj):
        """Display role as colored badge."""
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            ROLE_COLORS.get(obj.role, '#999999'),
            obj.get_role_display(),
        )
    role_badge.short_description = 'Role'
    role_badge.admin_order_field = 'role'

    def delete_model(self, request, obj):
        delete_user(user_id=obj.id)

    def delete_queryset(self, request, queryset):
        for user_id in queryset.values_list('id', flat=True):
            delete_user(user_id=user_id)
