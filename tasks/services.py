# tasks/services.py
import logging

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from points.services import PointsService
from .models import Task
from .signals import task_completed

logger = logging.getLogger(__name__)


class TaskService:
    """
    Service layer for completing tasks and paying out their points.
    """

    @staticmethod
    def points_for(task_type):
        catalogue = settings.REWARDS["TASK_POINTS"]
        if task_type not in catalogue:
            raise ValueError(f"Unknown task type: {task_type}")
        return catalogue[task_type]

    @staticmethod
    @transaction.atomic
    def complete_task(user, task_type, title="", points=None):
        """
        Record a completed task, credit its points and notify listeners.

        ``points`` defaults to the catalogue value for the task type.
        The ``task_completed`` signal carries ``first_completion`` so the
        referral program can react to a member's first qualifying action.
        """
        default_points = TaskService.points_for(task_type)
        points = default_points if points is None else points

        first_completion = not Task.objects.filter(user=user, completed=True).exists()

        task = Task.objects.create(
            user=user,
            task_type=task_type,
            title=title or dict(Task.TASK_TYPES).get(task_type, task_type),
            points=points,
            completed=True,
            completed_at=timezone.now(),
        )

        if points > 0:
            PointsService.credit(
                user,
                points,
                task_type,
                description=f"Completed {task.title}",
            )

        logger.info(
            f"[TASK_COMPLETE] {user.email} completed {task_type} (+{points}), "
            f"first_completion={first_completion}"
        )

        task_completed.send(
            sender=Task,
            task=task,
            user=user,
            first_completion=first_completion,
        )
        return task
