from django.contrib import admin

from .models import PointTransaction


@admin.register(PointTransaction)
class PointTransactionAdmin(admin.ModelAdmin):
    list_display = ['user', 'type', 'points', 'task_type', 'balance_after', 'created_at']
    list_filter = ['type', 'task_type', 'created_at']
    search_fields = ['user__email', 'description']
    readonly_fields = ['id', 'user', 'type', 'points', 'task_type', 'balance_after', 'created_at']
    raw_id_fields = ['user']

    def has_add_permission(self, request):
        # Ledger rows are written by PointsService only
        return False
