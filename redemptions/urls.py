# redemptions/urls.py
from django.urls import path

from .views import RedemptionListCreateView

app_name = 'redemptions'

urlpatterns = [
    path('', RedemptionListCreateView.as_view(), name='list'),
]
