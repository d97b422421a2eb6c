# redemptions/models.py
import uuid

from django.conf import settings
from django.db import models


class RedemptionRequest(models.Model):
    """A member's request to exchange points for a subscription."""
    STATUS_PENDING = "pending"
    STATUS_COMPLETED = "completed"
    STATUS_FAILED = "failed"
    STATUS_CANCELLED = "cancelled"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_COMPLETED, "Completed"),
        (STATUS_FAILED, "Failed"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    TERMINAL_STATUSES = (STATUS_COMPLETED, STATUS_FAILED, STATUS_CANCELLED)

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="redemption_requests"
    )
    availability = models.ForeignKey(
        "subscriptions.SubscriptionAvailability",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="redemption_requests"
    )
    # Copied from the availability so history survives stock deletion
    subscription_id = models.CharField(max_length=100)
    duration = models.CharField(max_length=50)
    points_cost = models.PositiveIntegerField(default=0)

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    activation_code = models.CharField(max_length=255, blank=True, null=True)
    instructions = models.TextField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    expires_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "redemption_requests"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "status"]),
        ]

    def __str__(self):
        return f"{self.user} - {self.subscription_id} ({self.duration}) [{self.status}]"

    @property
    def is_terminal(self):
        return self.status in self.TERMINAL_STATUSES
