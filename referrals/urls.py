# referrals/urls.py
from django.urls import path, include
from rest_framework.routers import SimpleRouter

from .views import ReferralViewSet

app_name = 'referrals'

router = SimpleRouter()
router.register(r'', ReferralViewSet, basename='referral')

urlpatterns = [
    path('', include(router.urls)),
]
