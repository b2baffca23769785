from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'stores'

router = DefaultRouter()
router.register(r'', views.StoreViewSet, basename='store')

urlpatterns = [
    # Store ViewSet routes
    # GET    /api/stores/                    - List stores (public)
    # POST   /api/stores/                    - Create store (admin)
    # GET    /api/stores/{id}/               - Get store (public)
    # PUT    /api/stores/{id}/               - Update store (admin)
    # PATCH  /api/stores/{id}/               - Partial update (admin)
    # DELETE /api/stores/{id}/               - Delete store (admin)

    # Custom store actions
    # GET    /api/stores/{id}/user-rating/   - Store with current user's rating
    # GET    /api/stores/{id}/statistics/    - Aggregate rating statistics
    path('', include(router.urls)),
]
