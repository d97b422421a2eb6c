from django.contrib import admin
from django.urls import path, include
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from users.admin_views import AdminUsersView
from subscriptions.admin_views import AdminSubscriptionsView
from redemptions.admin_views import AdminRedemptionsView

urlpatterns = [
    path('admin/', admin.site.urls),

    # Auth
    path('api/auth/', include('users.urls')),
    path('api/auth/token/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('api/auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),

    # Member API
    path('api/referrals/', include('referrals.urls')),
    path('api/points/', include('points.urls')),
    path('api/tasks/', include('tasks.urls')),
    path('api/subscriptions/', include('subscriptions.urls')),
    path('api/redemptions/', include('redemptions.urls')),

    # Admin operations
    path('api/admin/users/', AdminUsersView.as_view(), name='admin_users'),
    path('api/admin/subscriptions/', AdminSubscriptionsView.as_view(), name='admin_subscriptions'),
    path('api/admin/redemptions/', AdminRedemptionsView.as_view(), name='admin_redemptions'),
]
