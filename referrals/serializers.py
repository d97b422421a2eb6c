# referrals/serializers.py
from rest_framework import serializers

from .models import Referral, ReferralEarning


class ReferralSerializer(serializers.ModelSerializer):
    referred_email = serializers.EmailField(source='referred.email', read_only=True)
    referred_name = serializers.CharField(source='referred.full_name', read_only=True)

    class Meta:
        model = Referral
        fields = [
            'id', 'referred_email', 'referred_name', 'referral_code', 'level',
            'status', 'points_awarded', 'created_at', 'completed_at',
        ]


class ReferralEarningSerializer(serializers.ModelSerializer):
    referred_email = serializers.EmailField(source='referred.email', read_only=True)
    referred_name = serializers.CharField(source='referred.full_name', read_only=True)
    transaction_type = serializers.CharField(source='transaction.task_type', read_only=True)

    class Meta:
        model = ReferralEarning
        fields = [
            'id', 'referred_email', 'referred_name', 'transaction', 'transaction_type',
            'original_points', 'commission_percentage', 'commission_points',
            'level', 'created_at',
        ]


class ReferralStatsSerializer(serializers.Serializer):
    total_referrals = serializers.IntegerField()
    pending_referrals = serializers.IntegerField()
    completed_referrals = serializers.IntegerField()
    level1_referrals = serializers.IntegerField()
    level2_referrals = serializers.IntegerField()
    level3_referrals = serializers.IntegerField()
    bonus_earnings = serializers.IntegerField()
    commission_earnings = serializers.IntegerField()
    total_earnings = serializers.IntegerField()


class CommissionTierSerializer(serializers.Serializer):
    level = serializers.IntegerField()
    bonus_points = serializers.IntegerField()
    commission_percentage = serializers.DecimalField(max_digits=5, decimal_places=2)
