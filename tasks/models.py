from django.conf import settings
from django.db import models


class Task(models.Model):
    """A point-earning activity performed by a member."""
    TASK_TYPES = [
        ("spin", "Spin the Wheel"),
        ("scratch", "Scratch Card"),
        ("quiz", "Quiz"),
        ("daily_check_in", "Daily Check-in"),
        ("survey", "Survey"),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="tasks"
    )
    task_type = models.CharField(max_length=30, choices=TASK_TYPES, db_index=True)
    title = models.CharField(max_length=200, blank=True)
    points = models.PositiveIntegerField(default=0)
    completed = models.BooleanField(default=False)
    completed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "completed"]),
        ]

    def __str__(self):
        return f"{self.get_task_type_display()} - {self.user} (+{self.points})"
