# subscriptions/urls.py
from django.urls import path

from .views import AvailableSubscriptionsView

app_name = 'subscriptions'

urlpatterns = [
    path('', AvailableSubscriptionsView.as_view(), name='available'),
]
