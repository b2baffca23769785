from rest_framework import status, viewsets, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from .permissions import IsAdmin
from .serializers import (
    UserRegistrationSerializer,
    UserLoginSerializer,
    UserSerializer,
    PasswordUpdateSerializer,
    AdminUserSerializer,
    AdminUserCreateSerializer,
    AdminUserUpdateSerializer,
)
from .services import (
    register_user,
    authenticate_user,
    change_password,
    create_user,
    get_user_by_id,
    list_users,
    update_user,
    delete_user,
    DuplicateEmailError,
    InvalidCredentialsError,
    InactiveAccountError,
    UserNotFoundError,
    InvalidRoleError,
)


# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()
    tokens = TokensResponseSerializer()


class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


def _tokens_for(user):
    refresh = RefreshToken.for_user(user)
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }


@extend_schema(
    request=UserRegistrationSerializer,
    responses={
        201: AuthResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Register a new user account and receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Register a new user account."""
    serializer = UserRegistrationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = register_user(**serializer.validated_data)
    except DuplicateEmailError as e:
        return Response(
            {'error': str(e)},
            status=status.HTTP_400_BAD_REQUEST
        )

    return Response({
        'message': 'Registration successful',
        'user': UserSerializer(user).data,
        'tokens': _tokens_for(user),
    }, status=status.HTTP_201_CREATED)


@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Authenticate with email and password to receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with email and password."""
    serializer = UserLoginSerializer(data=request.data)

    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        user = authenticate_user(
            email=serializer.validated_data['email'],
            password=serializer.validated_data['password'],
        )
    except InvalidCredentialsError as e:
        return Response({'error': str(e)}, status=status.HTTP_401_UNAUTHORIZED)
    except InactiveAccountError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response({
        'message': 'Login successful',
        'user': UserSerializer(user).data,
        'tokens': _tokens_for(user),
    })


@extend_schema(
    responses={200: UserSerializer},
    description="Get the current authenticated user's profile.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_current_user(request):
    """Get current authenticated user profile."""
    return Response(UserSerializer(request.user).data)


@extend_schema(
    request=PasswordUpdateSerializer,
    responses={
        200: MessageResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Change the current user's password.",
    tags=['auth'],
)
@api_view(['PUT'])
@permission_classes([IsAuthenticated])
def update_password(request):
    """Update current user's password."""
    serializer = PasswordUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    change_password(
        user_id=request.user.id,
        new_password=serializer.validated_data['password'],
    )

    return Response({'message': 'Password updated successfully'})


class UserPagination(PageNumberPagination):
    """Custom pagination for the user directory."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class UserViewSet(viewsets.ViewSet):
    """
    Admin-only user directory.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Filter users by name/email/address/role
    create: Create a user (ADMIN or USER)
    retrieve: Get a user with their store rating
    update: Update a user
    partial_update: Partially update a user
    destroy: Delete a user (their store becomes ownerless)
    """

    permission_classes = [IsAuthenticated, IsAdmin]
    pagination_class = UserPagination
    lookup_value_regex = '[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}'
    serializer_class = AdminUserSerializer

    @extend_schema(
        parameters=[
            OpenApiParameter('name', OpenApiTypes.STR, description='Name contains'),
            OpenApiParameter('email', OpenApiTypes.STR, description='Email contains'),
            OpenApiParameter('address', OpenApiTypes.STR, description='Address contains'),
            OpenApiParameter('role', OpenApiTypes.STR, description='ADMIN, USER or STORE_OWNER'),
            OpenApiParameter('ordering', OpenApiTypes.STR, description='name, email, address, role, created_at; prefix - for descending'),
        ],
        responses={200: AdminUserSerializer(many=True)},
        tags=['users'],
    )
    def list(self, request):
        """List users with filters."""
        users = list_users(
            name=request.query_params.get('name'),
            email=request.query_params.get('email'),
            address=request.query_params.get('address'),
            role=request.query_params.get('role'),
            ordering=request.query_params.get('ordering'),
        )

        paginator = self.pagination_class()
        page = paginator.paginate_queryset(users, request, view=self)
        if page is not None:
            serializer = AdminUserSerializer(page, many=True)
            return paginator.get_paginated_response(serializer.data)

        return Response(AdminUserSerializer(users, many=True).data)

    @extend_schema(
        request=AdminUserCreateSerializer,
        responses={201: AdminUserSerializer, 400: ErrorResponseSerializer},
        tags=['users'],
    )
    def create(self, request):
        """Create a new user."""
        serializer = AdminUserCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            user = create_user(**serializer.validated_data)
        except (DuplicateEmailError, InvalidRoleError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(AdminUserSerializer(user).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        responses={200: AdminUserSerializer, 404: ErrorResponseSerializer},
        tags=['users'],
    )
    def retrieve(self, request, pk=None):
        """Get a user by ID."""
        try:
            user = get_user_by_id(user_id=pk)
        except UserNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(AdminUserSerializer(user).data)

    @extend_schema(
        request=AdminUserUpdateSerializer,
        responses={200: AdminUserSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=['users'],
    )
    def update(self, request, pk=None):
        """Update a user."""
        serializer = AdminUserUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            update_user(user_id=pk, **serializer.validated_data)
        except UserNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (DuplicateEmailError, InvalidRoleError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(AdminUserSerializer(get_user_by_id(user_id=pk)).data)

    @extend_schema(
        request=AdminUserUpdateSerializer,
        responses={200: AdminUserSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=['users'],
    )
    def partial_update(self, request, pk=None):
        """Partially update a user."""
        return self.update(request, pk=pk)

    @extend_schema(
        responses={204: None, 404: ErrorResponseSerializer},
        tags=['users'],
    )
    def destroy(self, request, pk=None):
        """Delete a user."""
        try:
            delete_user(user_id=pk)
        except UserNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)
