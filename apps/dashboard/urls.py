from django.urls import path
from . import views

app_name = 'dashboard'

urlpatterns = [
    path('admin/', views.admin_dashboard, name='admin-dashboard'),
    path('store-owner/', views.store_owner_dashboard, name='store-owner-dashboard'),
]
