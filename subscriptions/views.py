# subscriptions/views.py
from rest_framework import generics
from rest_framework.permissions import IsAuthenticated

from .models import SubscriptionAvailability
from .serializers import SubscriptionAvailabilitySerializer


class AvailableSubscriptionsView(generics.ListAPIView):
    """In-stock subscriptions a member can redeem points for."""
    permission_classes = [IsAuthenticated]
    serializer_class = SubscriptionAvailabilitySerializer
    queryset = SubscriptionAvailability.available.all()
