from django.contrib import admin

from .models import SubscriptionAvailability


@admin.register(SubscriptionAvailability)
class SubscriptionAvailabilityAdmin(admin.ModelAdmin):
    list_display = ['subscription_id', 'duration', 'points_cost', 'in_stock', 'updated_at']
    list_filter = ['in_stock', 'duration']
    search_fields = ['subscription_id', 'duration']
    list_editable = ['in_stock', 'points_cost']
    readonly_fields = ['created_at', 'updated_at']
