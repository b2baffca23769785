from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'ratings'

router = DefaultRouter()
router.register(r'', views.RatingViewSet, basename='rating')

urlpatterns = [
    # Rating ViewSet routes
    # GET    /api/ratings/          - List all ratings (admin)
    # POST   /api/ratings/          - Submit rating
    # PUT    /api/ratings/{id}/     - Update own rating
    # PATCH  /api/ratings/{id}/     - Partial update
    # DELETE /api/ratings/{id}/     - Delete own rating

    path('store/<uuid:store_id>/', views.store_ratings, name='store-ratings'),
    path(
        'user/<uuid:user_id>/store/<uuid:store_id>/',
        views.user_store_rating,
        name='user-store-rating',
    ),

    path('', include(router.urls)),
]
