# points/serializers.py - DRF Serializers
from rest_framework import serializers
from .models import PointTransaction


class PointTransactionSerializer(serializers.ModelSerializer):
    type_display = serializers.CharField(source='get_type_display', read_only=True)

    class Meta:
        model = PointTransaction
        fields = [
            'id', 'type', 'type_display', 'points', 'description',
            'task_type', 'balance_after', 'created_at'
        ]
        read_only_fields = fields


class DashboardStatsSerializer(serializers.Serializer):
    today_earned = serializers.IntegerField()
    weekly_earned = serializers.IntegerField()
    tasks_completed = serializers.IntegerField()
    total_transactions = serializers.IntegerField()
    points = serializers.IntegerField()
    total_earned = serializers.IntegerField()


class AdminPointTransactionSerializer(PointTransactionSerializer):
    user_id = serializers.UUIDField(source='user.id', read_only=True)
    user_email = serializers.EmailField(source='user.email', read_only=True)

    class Meta(PointTransactionSerializer.Meta):
        fields = PointTransactionSerializer.Meta.fields + ['user_id', 'user_email']
        read_only_fields = fields
