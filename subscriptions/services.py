# subscriptions/services.py
import logging
import re

from django.db import transaction
from django.core.exceptions import ValidationError

from .models import SubscriptionAvailability

logger = logging.getLogger(__name__)


def normalize_subscription_id(value):
    """'  Netflix Premium ' -> 'netflix_premium'"""
    return re.sub(r"\s+", "_", (value or "").strip().lower())


class SubscriptionService:
    """Business logic for the redeemable subscription stock."""

    @staticmethod
    def list():
        return list(SubscriptionAvailability.objects.all())

    @staticmethod
    def _get(availability_id):
        if not availability_id:
            raise ValueError("Missing required field: id")
        try:
            return SubscriptionAvailability.objects.select_for_update().get(pk=availability_id)
        except (ValueError, ValidationError):
            raise SubscriptionAvailability.DoesNotExist(
                f"Subscription {availability_id} not found"
            ) from None

    @staticmethod
    @transaction.atomic
    def toggle(availability_id, current_status=None):
        """
        Set ``in_stock`` to ``not current_status``. Without a current status
        the stored value is flipped.
        """
        availability = SubscriptionService._get(availability_id)

        if current_status is None:
            current_status = availability.in_stock
        elif not isinstance(current_status, bool):
            raise ValueError("currentStatus must be a boolean")

        availability.in_stock = not current_status
        availability.save(update_fields=["in_stock", "updated_at"])

        logger.info(
            f"[SUBSCRIPTIONS] {availability.subscription_id} ({availability.duration}) "
            f"in_stock={availability.in_stock}"
        )
        return availability

    @staticmethod
    @transaction.atomic
    def add(subscription_id, duration, points_cost=None):
        if not isinstance(subscription_id or "", str) or not isinstance(duration or "", str):
            raise ValueError("subscription_id and duration must be strings")
        subscription_id = normalize_subscription_id(subscription_id)
        duration = (duration or "").strip()
        if not subscription_id or not duration:
            raise ValueError("Missing required fields: subscription_id, duration")

        if points_cost is None:
            points_cost = 0
        if isinstance(points_cost, bool) or not isinstance(points_cost, int) or points_cost < 0:
            raise ValueError("points_cost must be a non-negative whole number")

        if SubscriptionAvailability.objects.filter(
            subscription_id=subscription_id, duration=duration
        ).exists():
            logger.warning(f"[SUBSCRIPTIONS] ❌ Duplicate availability: {subscription_id} ({duration})")
            raise ValueError(f"Subscription {subscription_id} with duration {duration} already exists")

        availability = SubscriptionAvailability.objects.create(
            subscription_id=subscription_id,
            duration=duration,
            points_cost=points_cost,
            in_stock=True,
        )
        logger.info(f"[SUBSCRIPTIONS] ✅ Added {subscription_id} ({duration}) at {points_cost} points")
        return availability

    @staticmethod
    @transaction.atomic
    def delete(availability_id):
        availability = SubscriptionService._get(availability_id)
        label = str(availability)
        availability.delete()
        logger.info(f"[SUBSCRIPTIONS] Deleted {label}")
