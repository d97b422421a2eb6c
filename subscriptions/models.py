# subscriptions/models.py
import uuid

from django.db import models


class InStockManager(models.Manager):
    def get_queryset(self):
        return super().get_queryset().filter(in_stock=True)


class SubscriptionAvailability(models.Model):
    """A redeemable subscription product for one duration, e.g. netflix / 1 month."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    subscription_id = models.CharField(max_length=100, db_index=True)
    duration = models.CharField(max_length=50)
    in_stock = models.BooleanField(default=True)
    points_cost = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = models.Manager()
    available = InStockManager()

    class Meta:
        db_table = "subscription_availability"
        ordering = ["subscription_id", "duration"]
        verbose_name_plural = "subscription availability"
        constraints = [
            models.UniqueConstraint(
                fields=["subscription_id", "duration"],
                name="unique_subscription_duration",
            ),
        ]

    def __str__(self):
        stock = "in stock" if self.in_stock else "out of stock"
        return f"{self.subscription_id} ({self.duration}) - {stock}"
