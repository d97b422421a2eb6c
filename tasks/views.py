import logging

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from .models import Task
from .serializers import TaskSerializer, CompleteTaskSerializer
from .services import TaskService

logger = logging.getLogger(__name__)


class TaskViewSet(viewsets.ReadOnlyModelViewSet):
    """A member's task history and task completion."""
    permission_classes = [IsAuthenticated]
    serializer_class = TaskSerializer

    def get_queryset(self):
        return Task.objects.filter(user=self.request.user)

    @action(detail=False, methods=['post'])
    def complete(self, request):
        serializer = CompleteTaskSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            task = TaskService.complete_task(
                request.user,
                serializer.validated_data['task_type'],
                title=serializer.validated_data.get('title', ''),
            )
        except ValueError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(TaskSerializer(task).data, status=status.HTTP_201_CREATED)
