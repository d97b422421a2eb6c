# points/urls.py
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import DashboardViewSet

app_name = 'points'

router = DefaultRouter()
router.register(r'dashboard', DashboardViewSet, basename='dashboard')

urlpatterns = [
    path('', include(router.urls)),
]
