# users/admin_views.py
from rest_framework.response import Response

from core.views import AdminActionView
from points.serializers import AdminPointTransactionSerializer
from redemptions.serializers import RedemptionRequestSerializer
from .serializers import AdminUserSerializer, UpdatePointsSerializer, UpdateStatusSerializer
from .services import UserAdminService


class AdminUsersView(AdminActionView):
    """
    GET  ?action=list | recent-activity
    POST ?action=update-points   {userId, pointsToAdd, description}
    POST ?action=update-status   {userId, action: ban|unban|suspend|activate}
    """
    get_actions = {
        'list': 'list_users',
        'recent-activity': 'recent_activity',
    }
    post_actions = {
        'update-points': 'update_points',
        'update-status': 'update_status',
    }
    default_post_action = 'list'
    action_labels = {
        'list': 'fetch users',
        'recent-activity': 'fetch recent activity',
        'update-points': 'update points',
        'update-status': 'update user status',
    }
    not_found_message = 'User profile not found'

    def list_users(self, request):
        users = UserAdminService.list_users()
        return Response({'users': AdminUserSerializer(users, many=True).data})

    def recent_activity(self, request):
        transactions, redemptions = UserAdminService.recent_activity()
        return Response({
            'transactions': AdminPointTransactionSerializer(transactions, many=True).data,
            'redemptions': RedemptionRequestSerializer(redemptions, many=True).data,
        })

    def update_points(self, request):
        payload = self.get_payload(request, UpdatePointsSerializer)
        message = UserAdminService.update_points(
            payload.get('userId'),
            payload.get('pointsToAdd'),
            payload.get('description'),
        )
        return Response({'success': True, 'message': message})

    def update_status(self, request):
        payload = self.get_payload(request, UpdateStatusSerializer)
        action = payload.get('action')
        user = UserAdminService.update_status(payload.get('userId'), action)
        return Response({
            'success': True,
            'message': f"User {UserAdminService.STATUS_ACTION_PAST[action]} successfully",
            'status': user.status,
            'ban_expires_at': user.ban_expires_at,
        })
