# subscriptions/serializers.py
from rest_framework import serializers

from core.serializers import StrictCharField, StrictIntegerField, optional

from .models import SubscriptionAvailability


class SubscriptionAvailabilitySerializer(serializers.ModelSerializer):
    class Meta:
        model = SubscriptionAvailability
        fields = [
            'id', 'subscription_id', 'duration', 'in_stock', 'points_cost',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class ToggleSubscriptionSerializer(serializers.Serializer):
    id = optional(StrictCharField)
    currentStatus = optional(serializers.BooleanField)


class AddSubscriptionSerializer(serializers.Serializer):
    subscription_id = optional(StrictCharField)
    duration = optional(StrictCharField)
    points_cost = optional(StrictIntegerField, min_value=0)


class DeleteSubscriptionSerializer(serializers.Serializer):
    id = optional(StrictCharField)
