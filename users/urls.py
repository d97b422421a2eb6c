# users/urls.py
from django.urls import path

from .views import RegisterView, MeView

app_name = 'users'

urlpatterns = [
    path('register/', RegisterView.as_view(), name='register'),
    path('me/', MeView.as_view(), name='me'),
]
