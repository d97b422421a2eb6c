# referrals/admin.py
from django.contrib import admin
from django.db.models import Sum

from .models import ReferralCode, Referral, ReferralEarning


@admin.register(ReferralCode)
class ReferralCodeAdmin(admin.ModelAdmin):
    list_display = ['user', 'code', 'is_active', 'created_at', 'referral_count']
    list_filter = ['is_active', 'created_at']
    search_fields = ['user__email', 'user__full_name', 'code']
    readonly_fields = ['code', 'created_at']

    def referral_count(self, obj):
        return obj.user.referrals_made.count()
    referral_count.short_description = 'Total Referrals'


@admin.register(Referral)
class ReferralAdmin(admin.ModelAdmin):
    list_display = ['referrer', 'referred', 'level', 'status', 'points_awarded', 'created_at', 'total_commission']
    list_filter = ['level', 'status', 'created_at']
    search_fields = ['referrer__email', 'referred__email', 'referral_code']
    readonly_fields = ['created_at', 'completed_at']
    raw_id_fields = ['referrer', 'referred']

    def total_commission(self, obj):
        total = ReferralEarning.objects.filter(
            referrer=obj.referrer,
            referred=obj.referred,
        ).aggregate(total=Sum('commission_points'))['total'] or 0
        return f'{total} pts'
    total_commission.short_description = 'Commission Earned'


@admin.register(ReferralEarning)
class ReferralEarningAdmin(admin.ModelAdmin):
    list_display = [
        'referrer',
        'referred',
        'level',
        'original_points',
        'commission_percentage',
        'commission_points',
        'created_at',
    ]
    list_filter = ['level', 'created_at']
    search_fields = ['referrer__email', 'referred__email']
    readonly_fields = ['created_at']
    raw_id_fields = ['referrer', 'referred', 'transaction']

    fieldsets = (
        ('Basic Information', {
            'fields': ('referrer', 'referred', 'transaction', 'level')
        }),
        ('Commission Details', {
            'fields': ('original_points', 'commission_percentage', 'commission_points')
        }),
        ('Timestamps', {
            'fields': ('created_at',),
            'classes': ('collapse',)
        }),
    )
