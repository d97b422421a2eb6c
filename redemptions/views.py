# redemptions/views.py
import logging

from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from subscriptions.models import SubscriptionAvailability
from .models import RedemptionRequest
from .serializers import RedemptionRequestSerializer, CreateRedemptionSerializer
from .services import RedemptionService

logger = logging.getLogger(__name__)


class RedemptionListCreateView(generics.ListAPIView):
    """A member's redemption requests; POST opens a new one."""
    permission_classes = [IsAuthenticated]
    serializer_class = RedemptionRequestSerializer

    def get_queryset(self):
        return RedemptionRequest.objects.filter(user=self.request.user).select_related('user')

    def post(self, request, *args, **kwargs):
        serializer = CreateRedemptionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            redemption = RedemptionService.create_request(
                request.user, serializer.validated_data['availability_id']
            )
        except SubscriptionAvailability.DoesNotExist:
            return Response({'error': 'Subscription not found'}, status=status.HTTP_404_NOT_FOUND)
        except ValueError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(RedemptionRequestSerializer(redemption).data, status=status.HTTP_201_CREATED)
