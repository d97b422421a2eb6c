from django.contrib import admin

from .models import Task


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = ['user', 'task_type', 'title', 'points', 'completed', 'completed_at']
    list_filter = ['task_type', 'completed', 'created_at']
    search_fields = ['user__email', 'title']
    raw_id_fields = ['user']
