"""
Role-based permission classes shared by every app.

The role check reads ``request.user.role`` directly; for store owners that
field is kept in step with ownership by ``apps.stores.services.ownership``.
"""

from rest_framework import permissions


class IsAdmin(permissions.BasePermission):
    """Permission: Only administrators."""

    message = 'Access denied. Admin role required.'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request.user.is_admin)


class IsStoreOwner(permissions.BasePermission):
    """Permission: Only store owners."""

    message = 'Access denied. Store owner role required.'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request.user.is_store_owner)


class IsSelfOrAdmin(permissions.BasePermission):
    """
    Permission: the user named by the ``user_id`` URL kwarg, or an admin.
    """

    message = 'You can only view your own ratings.'

    def has_permission(self, request, view):
        if not (request.user and request.user.is_authenticated):
            return False
        if request.user.is_admin:
            return True
        return str(view.kwargs.get('user_id')) == str(request.user.id)
