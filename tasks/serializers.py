from rest_framework import serializers

from .models import Task


class TaskSerializer(serializers.ModelSerializer):
    task_type_display = serializers.CharField(source='get_task_type_display', read_only=True)

    class Meta:
        model = Task
        fields = [
            'id', 'task_type', 'task_type_display', 'title', 'points',
            'completed', 'completed_at', 'created_at'
        ]
        read_only_fields = fields


class CompleteTaskSerializer(serializers.Serializer):
    task_type = serializers.ChoiceField(choices=Task.TASK_TYPES)
    title = serializers.CharField(max_length=200, required=False, allow_blank=True)
