from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User
import openpyxl
from django.http import HttpResponse
from datetime import datetime


def export_users_to_excel(modeladmin, request, queryset):
    """
    Export selected users with their points to an Excel file.
    """
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Users"

    # Header row
    ws.append(["Full Name", "Email", "Phone", "Points", "Total Earned", "Status", "Date Joined"])

    for user in queryset:
        ws.append([
            user.get_full_name(),
            user.email,
            user.phone,
            user.points,
            user.total_earned,
            user.status,
            user.date_joined.strftime("%Y-%m-%d %H:%M"),
        ])

    response = HttpResponse(
        content_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )
    filename = f"users_export_{datetime.now().strftime('%Y%m%d_%H%M%S')}.xlsx"
    response["Content-Disposition"] = f'attachment; filename={filename}'
    wb.save(response)
    return response

export_users_to_excel.short_description = "📤 Export selected users to Excel"


def export_emails(modeladmin, request, queryset):
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Emails"
    ws.append(["Email"])
    for user in queryset:
        ws.append([user.email])
    response = HttpResponse(content_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")
    response["Content-Disposition"] = 'attachment; filename="emails.xlsx"'
    wb.save(response)
    return response
export_emails.short_description = "📧 Export Emails Only"


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    actions = [export_users_to_excel, export_emails]
    list_display = ('email', 'full_name', 'points', 'total_earned', 'is_active', 'ban_expires_at', 'date_joined')
    list_filter = ('is_active', 'is_staff', 'date_joined')
    search_fields = ('email', 'full_name', 'phone')
    ordering = ('-date_joined',)

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Personal info', {'fields': ('full_name', 'phone')}),
        ('Points', {'fields': ('points', 'total_earned')}),
        ('Role & Status', {'fields': ('is_active', 'ban_expires_at', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Important dates', {'fields': ('last_login', 'date_joined')}),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'full_name', 'password1', 'password2'),
        }),
    )

    readonly_fields = ('date_joined', 'last_login', 'points', 'total_earned')
