from django.contrib import admin

from .models import RedemptionRequest


@admin.register(RedemptionRequest)
class RedemptionRequestAdmin(admin.ModelAdmin):
    list_display = ['user', 'subscription_id', 'duration', 'points_cost', 'status', 'created_at', 'completed_at', 'expires_at']
    list_filter = ['status', 'created_at']
    search_fields = ['user__email', 'subscription_id', 'activation_code']
    readonly_fields = ['created_at', 'updated_at', 'completed_at', 'expires_at']
    raw_id_fields = ['user', 'availability']
