# redemptions/serializers.py
from rest_framework import serializers

from core.serializers import StrictCharField, optional

from .models import RedemptionRequest


class RedemptionRequestSerializer(serializers.ModelSerializer):
    user_id = serializers.UUIDField(source='user.id', read_only=True)
    user_email = serializers.EmailField(source='user.email', read_only=True)
    user_name = serializers.CharField(source='user.full_name', read_only=True)

    class Meta:
        model = RedemptionRequest
        fields = [
            'id', 'user_id', 'user_email', 'user_name', 'subscription_id', 'duration',
            'points_cost', 'status', 'activation_code', 'instructions',
            'created_at', 'updated_at', 'completed_at', 'expires_at',
        ]
        read_only_fields = fields


class CreateRedemptionSerializer(serializers.Serializer):
    availability_id = serializers.UUIDField()


class UpdateRedemptionSerializer(serializers.Serializer):
    requestId = optional(StrictCharField)
    newStatus = optional(StrictCharField)
    activationCode = optional(StrictCharField)
    instructions = optional(StrictCharField)
