from rest_framework import status, viewsets, serializers as drf_serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.accounts.permissions import IsAdmin, IsSelfOrAdmin
from .serializers import (
    RatingSerializer,
    StoreRatingSerializer,
    RatingCreateSerializer,
    RatingUpdateSerializer,
    RatingFilterSerializer,
)
from .services import (
    submit_rating,
    get_rating_by_id,
    update_rating,
    delete_rating,
    ratings_for_store,
    get_user_rating_for_store,
    list_ratings,
    # Exceptions
    RatingNotFoundError,
    StoreNotFoundError,
    DuplicateRatingError,
    InvalidRatingValueError,
    UnauthorizedRatingActionError,
)


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


class RatingPagination(PageNumberPagination):
    """Custom pagination for ratings."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class RatingViewSet(viewsets.ViewSet):
    """
    ViewSet for Rating operations.

    list: Get all ratings on the platform (admin only)
    create: Rate a store, once per store (authenticated)
    update: Change the value of your rating (author only)
    partial_update: Same as update (author only)
    destroy: Delete your rating (author only)

    Authorship is checked by the rating ledger, not by a permission class,
    so the check happens under the same row lock as the write.
    """

    pagination_class = RatingPagination
    lookup_value_regex = '[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}'
    serializer_class = RatingSerializer

    def get_permissions(self):
        """Set permissions based on action."""
        if self.action == 'list':
            return [IsAuthenticated(), IsAdmin()]
        return [IsAuthenticated()]

    @extend_schema(
        parameters=[
            OpenApiParameter('store', OpenApiTypes.UUID, description='Filter by store'),
            OpenApiParameter('user', OpenApiTypes.UUID, description='Filter by author'),
            OpenApiParameter('value', OpenApiTypes.INT, description='Exact rating (1-5)'),
        ],
        responses={200: RatingSerializer(many=True)},
        tags=['ratings'],
    )
    def list(self, request):
        """List all ratings, newest first."""
        filters = RatingFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)

        ratings = list_ratings(
            store_id=filters.validated_data.get('store'),
            user_id=filters.validated_data.get('user'),
            value=filters.validated_data.get('value'),
        )

        paginator = self.pagination_class()
        page = paginator.paginate_queryset(ratings, request, view=self)
        if page is not None:
            serializer = RatingSerializer(page, many=True)
            return paginator.get_paginated_response(serializer.data)

        return Response(RatingSerializer(ratings, many=True).data)

    @extend_schema(
        request=RatingCreateSerializer,
        responses={201: RatingSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=['ratings'],
    )
    def create(self, request):
        """Submit a rating for a store."""
        serializer = RatingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            rating = submit_rating(
                user=request.user,
                store_id=serializer.validated_data['store_id'],
                value=serializer.validated_data['value'],
            )
        except StoreNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (DuplicateRatingError, InvalidRatingValueError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        output = RatingSerializer(get_rating_by_id(rating_id=rating.id))
        return Response(output.data, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=RatingUpdateSerializer,
        responses={
            200: RatingSerializer,
            400: ErrorResponseSerializer,
            403: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
        },
        tags=['ratings'],
    )
    def update(self, request, pk=None):
        """Change the value of your rating."""
        serializer = RatingUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            update_rating(
                rating_id=pk,
                user=request.user,
                value=serializer.validated_data['value'],
            )
        except RatingNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except UnauthorizedRatingActionError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except InvalidRatingValueError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(RatingSerializer(get_rating_by_id(rating_id=pk)).data)

    @extend_schema(
        request=RatingUpdateSerializer,
        responses={
            200: RatingSerializer,
            400: ErrorResponseSerializer,
            403: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
        },
        tags=['ratings'],
    )
    def partial_update(self, request, pk=None):
        """Partially update a rating (only the value can change)."""
        return self.update(request, pk=pk)

    @extend_schema(
        responses={204: None, 403: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=['ratings'],
    )
    def destroy(self, request, pk=None):
        """Delete your rating."""
        try:
            delete_rating(rating_id=pk, user=request.user)
        except RatingNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except UnauthorizedRatingActionError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    responses={200: StoreRatingSerializer(many=True), 404: ErrorResponseSerializer},
    description="All ratings of a store, newest first.",
    tags=['ratings'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def store_ratings(request, store_id):
    """Get ratings for a store."""
    try:
        ratings = ratings_for_store(store_id=store_id)
    except StoreNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(StoreRatingSerializer(ratings, many=True).data)


@extend_schema(
    responses={200: RatingSerializer, 403: ErrorResponseSerializer, 404: ErrorResponseSerializer},
    description="A user's rating for a store. Users may only look up their own; admins any.",
    tags=['ratings'],
)
@api_view(['GET'])
@permission_classes([IsSelfOrAdmin])
def user_store_rating(request, user_id, store_id):
    """Get a user's rating for a store."""
    rating = get_user_rating_for_store(user_id=user_id, store_id=store_id)

    if rating is None:
        return Response({'error': 'Rating not found'}, status=status.HTTP_404_NOT_FOUND)

    return Response(RatingSerializer(rating).data)
