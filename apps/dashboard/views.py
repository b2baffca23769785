from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema
from apps.accounts.permissions import IsAdmin, IsStoreOwner
from apps.stores.services import StoreNotFoundError
from .services import get_admin_dashboard, get_store_owner_dashboard
from .serializers import (
    AdminDashboardSerializer,
    StoreOwnerDashboardSerializer,
    ErrorSerializer,
)


@extend_schema(
    responses={200: AdminDashboardSerializer},
    description="Platform totals, user counts per role, average rating and recent ratings.",
    tags=['dashboard'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdmin])
def admin_dashboard(request):
    """Admin dashboard - thin HTTP handler."""
    data = get_admin_dashboard()
    return Response(AdminDashboardSerializer(data).data)


@extend_schema(
    responses={
        200: StoreOwnerDashboardSerializer,
        404: ErrorSerializer,
    },
    description="The current owner's store with its rating statistics and recent ratings.",
    tags=['dashboard'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsStoreOwner])
def store_owner_dashboard(request):
    """Store owner dashboard - thin HTTP handler."""
    try:
        data = get_store_owner_dashboard(user=request.user)
    except StoreNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(StoreOwnerDashboardSerializer(data).data)
