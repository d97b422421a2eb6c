# redemptions/admin_views.py
from rest_framework.response import Response

from core.views import AdminActionView
from .models import RedemptionRequest
from .serializers import RedemptionRequestSerializer, UpdateRedemptionSerializer
from .services import RedemptionService


class AdminRedemptionsView(AdminActionView):
    """
    GET  ?action=list    (default for GET)
    POST ?action=update  (default for POST) {requestId, newStatus, activationCode?, instructions?}
    """
    get_actions = {
        'list': 'list_redemptions',
    }
    post_actions = {
        'update': 'update_redemption',
    }
    default_post_action = 'update'
    action_labels = {
        'list': 'fetch redemption requests',
        'update': 'update redemption request',
    }
    not_found_message = 'Redemption request not found'

    def list_redemptions(self, request):
        redemptions = RedemptionRequest.objects.select_related('user').order_by('-created_at')
        return Response(RedemptionRequestSerializer(redemptions, many=True).data)

    def update_redemption(self, request):
        payload = self.get_payload(request, UpdateRedemptionSerializer)
        redemption = RedemptionService.transition(
            payload.get('requestId'),
            payload.get('newStatus'),
            activation_code=payload.get('activationCode'),
            instructions=payload.get('instructions'),
        )
        return Response(RedemptionRequestSerializer(redemption).data)
