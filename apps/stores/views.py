from rest_framework import viewsets, status, serializers
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.accounts.permissions import IsAdmin
from apps.ratings.services import (
    get_store_statistics,
    StoreNotFoundError as RatingsStoreNotFoundError,
)
from .serializers import (
    StoreSerializer,
    StoreWithUserRatingSerializer,
    StoreCreateSerializer,
    StoreUpdateSerializer,
    StoreStatisticsSerializer,
)
from .services import (
    create_store,
    get_store_by_id,
    list_stores,
    update_store,
    delete_store,
    # Exceptions
    StoreNotFoundError,
    OwnerNotFoundError,
    DuplicateStoreEmailError,
    OwnerAlreadyAssignedError,
)


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


class StorePagination(PageNumberPagination):
    """Custom pagination for stores."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class StoreViewSet(viewsets.ViewSet):
    """
    ViewSet for Store operations.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Get all stores with their average rating (public)
    create: Create a store, optionally with an owner (admin only)
    retrieve: Get a store with owner and average rating (public)
    update: Update a store / reassign its owner (admin only)
    partial_update: Partially update a store (admin only)
    destroy: Delete a store and its ratings (admin only)
    """

    pagination_class = StorePagination
    lookup_value_regex = '[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}'
    serializer_class = StoreSerializer

    def get_permissions(self):
        """Set permissions based on action."""
        if self.action in ['create', 'update', 'partial_update', 'destroy']:
            return [IsAuthenticated(), IsAdmin()]
        if self.action == 'user_rating':
            return [IsAuthenticated()]
        return [AllowAny()]

    @extend_schema(
        parameters=[
            OpenApiParameter('name', OpenApiTypes.STR, description='Name contains'),
            OpenApiParameter('address', OpenApiTypes.STR, description='Address contains'),
            OpenApiParameter('email', OpenApiTypes.STR, description='Email contains'),
            OpenApiParameter('ordering', OpenApiTypes.STR, description='name, email, address, created_at; prefix - for descending'),
        ],
        responses={200: StoreSerializer(many=True)},
        tags=['stores'],
    )
    def list(self, request):
        """List stores with filters."""
        stores = list_stores(
            name=request.query_params.get('name'),
            address=request.query_params.get('address'),
            email=request.query_params.get('email'),
            ordering=request.query_params.get('ordering'),
        )

        paginator = self.pagination_class()
        page = paginator.paginate_queryset(stores, request, view=self)
        if page is not None:
            serializer = StoreSerializer(page, many=True)
            return paginator.get_paginated_response(serializer.data)

        return Response(StoreSerializer(stores, many=True).data)

    @extend_schema(
        request=StoreCreateSerializer,
        responses={201: StoreSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=['stores'],
    )
    def create(self, request):
        """Create a new store."""
        serializer = StoreCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            store = create_store(
                name=serializer.validated_data['name'],
                email=serializer.validated_data['email'],
                address=serializer.validated_data['address'],
                owner_id=serializer.validated_data.get('owner_id'),
            )
        except OwnerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (DuplicateStoreEmailError, OwnerAlreadyAssignedError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        output = StoreSerializer(get_store_by_id(store_id=store.id))
        return Response(output.data, status=status.HTTP_201_CREATED)

    @extend_schema(
        responses={200: StoreSerializer, 404: ErrorResponseSerializer},
        tags=['stores'],
    )
    def retrieve(self, request, pk=None):
        """Get a store by ID."""
        try:
            store = get_store_by_id(store_id=pk)
        except StoreNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(StoreSerializer(store).data)

    @extend_schema(
        request=StoreUpdateSerializer,
        responses={200: StoreSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=['stores'],
    )
    def update(self, request, pk=None):
        """Update a store and/or reassign its owner."""
        serializer = StoreUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        clear_owner = 'owner_id' in data and data['owner_id'] is None

        try:
            update_store(
                store_id=pk,
                name=data.get('name'),
                email=data.get('email'),
                address=data.get('address'),
                owner_id=data.get('owner_id'),
                clear_owner=clear_owner,
            )
        except (StoreNotFoundError, OwnerNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (DuplicateStoreEmailError, OwnerAlreadyAssignedError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(StoreSerializer(get_store_by_id(store_id=pk)).data)

    @extend_schema(
        request=StoreUpdateSerializer,
        responses={200: StoreSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=['stores'],
    )
    def partial_update(self, request, pk=None):
        """Partially update a store."""
        return self.update(request, pk=pk)

    @extend_schema(
        responses={204: None, 404: ErrorResponseSerializer},
        tags=['stores'],
    )
    def destroy(self, request, pk=None):
        """Delete a store."""
        try:
            delete_store(store_id=pk)
        except StoreNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        responses={200: StoreWithUserRatingSerializer, 404: ErrorResponseSerializer},
        description="Get a store together with the current user's rating of it.",
        tags=['stores'],
    )
    @action(detail=True, methods=['get'], url_path='user-rating')
    def user_rating(self, request, pk=None):
        """Get store with the requesting user's rating."""
        try:
            store = get_store_by_id(store_id=pk)
        except StoreNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        serializer = StoreWithUserRatingSerializer(store, context={'request': request})
        return Response(serializer.data)

    @extend_schema(
        responses={200: StoreStatisticsSerializer, 404: ErrorResponseSerializer},
        description="Average rating, rating count and 1-5 distribution for a store.",
        tags=['stores'],
    )
    @action(detail=True, methods=['get'])
    def statistics(self, request, pk=None):
        """Get aggregate rating statistics for a store."""
        try:
            data = get_store_statistics(store_id=pk)
        except RatingsStoreNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(StoreStatisticsSerializer(data).data)
