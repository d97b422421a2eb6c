# points/views.py
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from .models import PointTransaction
from .serializers import PointTransactionSerializer, DashboardStatsSerializer
from .services import PointsService, DashboardService


class DashboardViewSet(viewsets.ViewSet):
    """Member dashboard: balance, earning stats and ledger."""
    permission_classes = [IsAuthenticated]

    @action(detail=False, methods=['get'])
    def stats(self, request):
        """Earning stats; zeroed when the database is unavailable"""
        data = DashboardService.stats(request.user)
        return Response(DashboardStatsSerializer(data).data)

    @action(detail=False, methods=['get'])
    def recent(self, request):
        """Most recent ledger rows"""
        transactions = DashboardService.recent_activity(request.user)
        return Response(PointTransactionSerializer(transactions, many=True).data)

    @action(detail=False, methods=['get'])
    def transactions(self, request):
        """Full ledger, optionally filtered by ?type=earn|redeem"""
        queryset = PointTransaction.objects.filter(user=request.user)
        txn_type = request.query_params.get('type')
        if txn_type in (PointTransaction.TYPE_EARN, PointTransaction.TYPE_REDEEM):
            queryset = queryset.filter(type=txn_type)
        return Response(PointTransactionSerializer(queryset, many=True).data)

    @action(detail=False, methods=['post'], url_path='welcome-bonus')
    def welcome_bonus(self, request):
        """Re-check the welcome bonus for accounts that missed it"""
        txn = PointsService.award_welcome_bonus(request.user)
        return Response(
            {
                'awarded': txn is not None,
                'points': request.user.points,
            },
            status=status.HTTP_201_CREATED if txn else status.HTTP_200_OK,
        )
