from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'users'

router = DefaultRouter()
router.register(r'', views.UserViewSet, basename='user')

urlpatterns = [
    # GET    /api/users/          - List users (admin)
    # POST   /api/users/          - Create user (admin)
    # GET    /api/users/{id}/     - Get user (admin)
    # PUT    /api/users/{id}/     - Update user (admin)
    # PATCH  /api/users/{id}/     - Partial update (admin)
    # DELETE /api/users/{id}/     - Delete user (admin)
    path('', include(router.urls)),
]
