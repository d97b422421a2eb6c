# users/serializers.py
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from core.serializers import StrictCharField, StrictIntegerField, optional

from .models import User


class UserSerializer(serializers.ModelSerializer):
    status = serializers.CharField(read_only=True)
    referral_code = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id', 'email', 'full_name', 'phone', 'points', 'total_earned',
            'status', 'is_staff', 'referral_code', 'date_joined',
        ]
        read_only_fields = fields

    def get_referral_code(self, obj):
        referral_code = getattr(obj, 'referral_code', None)
        return referral_code.code if referral_code else None


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=8)
    full_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=17, required=False, allow_blank=True)
    referral_code = serializers.CharField(max_length=10, required=False, allow_blank=True)

    def validate_email(self, value):
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError('A user with this email already exists.')
        return value

    def validate_password(self, value):
        validate_password(value)
        return value


class AdminUserSerializer(serializers.ModelSerializer):
    status = serializers.CharField(read_only=True)
    transaction_count = serializers.IntegerField(read_only=True, default=0)
    task_count = serializers.IntegerField(read_only=True, default=0)
    spin_count = serializers.IntegerField(read_only=True, default=0)
    scratch_count = serializers.IntegerField(read_only=True, default=0)
    created_at = serializers.DateTimeField(source='date_joined', read_only=True)

    class Meta:
        model = User
        fields = [
            'id', 'email', 'full_name', 'phone', 'points', 'total_earned',
            'status', 'ban_expires_at', 'last_login', 'created_at', 'updated_at',
            'transaction_count', 'task_count', 'spin_count', 'scratch_count',
        ]


class UpdatePointsSerializer(serializers.Serializer):
    userId = optional(StrictCharField)
    pointsToAdd = optional(StrictIntegerField)
    description = optional(StrictCharField)


class UpdateStatusSerializer(serializers.Serializer):
    userId = optional(StrictCharField)
    action = optional(StrictCharField)
