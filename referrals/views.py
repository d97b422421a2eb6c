# referrals/views.py
import logging

from django.db.models import Q
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .models import Referral, ReferralEarning
from .policy import schedule_as_dict
from .serializers import (
    ReferralSerializer,
    ReferralEarningSerializer,
    ReferralStatsSerializer,
    CommissionTierSerializer,
)
from .services import ReferralService
from .stats import ReferralStatsService

logger = logging.getLogger(__name__)


def _apply_list_filters(queryset, params, points_field, statuses=None):
    """
    Shared ?search= / ?level= / ?status= / ?sort= / ?order= handling for the
    referral and earning lists. Unknown values are ignored.
    """
    search = params.get('search', '').strip()
    if search:
        queryset = queryset.filter(
            Q(referred__email__icontains=search) | Q(referred__full_name__icontains=search)
        )

    level = params.get('level')
    if level in ('1', '2', '3'):
        queryset = queryset.filter(level=int(level))

    status_filter = params.get('status')
    if statuses and status_filter in statuses:
        queryset = queryset.filter(status=status_filter)

    sort_fields = {
        'date': 'created_at',
        'level': 'level',
        'points': points_field,
    }
    sort_field = sort_fields.get(params.get('sort'), 'created_at')
    if params.get('order') == 'asc':
        return queryset.order_by(sort_field, 'created_at')
    return queryset.order_by(f'-{sort_field}', '-created_at')


class ReferralViewSet(viewsets.ViewSet):
    """Referral code, link, stats and the member's referral/earning lists."""
    permission_classes = [IsAuthenticated]

    @action(detail=False, methods=['get'])
    def code(self, request):
        referral_code = ReferralService.get_or_create_code(request.user)
        origin = request.query_params.get('origin')
        return Response({
            'code': referral_code.code,
            'is_active': referral_code.is_active,
            'referral_link': ReferralService.referral_link(referral_code.code, origin),
        })

    @action(detail=False, methods=['get'])
    def stats(self, request):
        data = ReferralStatsService.for_user(request.user)
        return Response(ReferralStatsSerializer(data).data)

    @action(detail=False, methods=['get'])
    def referrals(self, request):
        queryset = Referral.objects.filter(referrer=request.user).select_related('referred')
        queryset = _apply_list_filters(
            queryset,
            request.query_params,
            points_field='points_awarded',
            statuses=(Referral.STATUS_PENDING, Referral.STATUS_COMPLETED),
        )
        return Response(ReferralSerializer(queryset, many=True).data)

    @action(detail=False, methods=['get'])
    def earnings(self, request):
        queryset = ReferralEarning.objects.filter(referrer=request.user).select_related(
            'referred', 'transaction'
        )
        queryset = _apply_list_filters(queryset, request.query_params, points_field='commission_points')
        return Response(ReferralEarningSerializer(queryset, many=True).data)

    @action(detail=False, methods=['get'])
    def program(self, request):
        """Bonus and commission per level"""
        return Response(CommissionTierSerializer(schedule_as_dict(), many=True).data)
