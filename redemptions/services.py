# redemptions/services.py
import logging
from datetime import timedelta

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from points.models import PointTransaction
from points.services import PointsService
from subscriptions.models import SubscriptionAvailability
from .models import RedemptionRequest

logger = logging.getLogger(__name__)


class RedemptionService:
    """
    Redemption lifecycle.

        pending -> completed   (activation code required, expires after REDEMPTION_VALIDITY_DAYS)
        pending -> failed
        pending -> cancelled

    Terminal states never change again.
    """

    @staticmethod
    @transaction.atomic
    def create_request(user, availability_id):
        """Debit the subscription's points cost and open a pending request."""
        if not availability_id:
            raise ValueError("Missing required field: availability_id")

        try:
            availability = SubscriptionAvailability.objects.select_for_update().get(pk=availability_id)
        except (ValueError, ValidationError):
            raise SubscriptionAvailability.DoesNotExist(
                f"Subscription {availability_id} not found"
            ) from None

        if not availability.in_stock:
            raise ValueError("This subscription is currently out of stock")

        if availability.points_cost > 0:
            PointsService.debit(
                user,
                availability.points_cost,
                PointTransaction.SOURCE_REDEMPTION,
                description=f"Redeemed {availability.subscription_id} ({availability.duration})",
            )

        redemption = RedemptionRequest.objects.create(
            user=user,
            availability=availability,
            subscription_id=availability.subscription_id,
            duration=availability.duration,
            points_cost=availability.points_cost,
        )
        logger.info(
            f"[REDEMPTION] ✅ {user.email} requested {availability.subscription_id} "
            f"({availability.duration}) for {availability.points_cost} points"
        )
        return redemption

    @staticmethod
    @transaction.atomic
    def transition(request_id, new_status, activation_code=None, instructions=None):
        """
        Move a pending request to a terminal state.
        Raises ValueError for bad input or an illegal transition and
        RedemptionRequest.DoesNotExist for an unknown request.
        """
        if not request_id or not new_status:
            raise ValueError("Missing required fields: requestId, newStatus")

        valid_statuses = dict(RedemptionRequest.STATUS_CHOICES)
        if not isinstance(new_status, str) or new_status not in valid_statuses:
            raise ValueError(f"Invalid status: {new_status}")

        if new_status == RedemptionRequest.STATUS_COMPLETED and not activation_code:
            raise ValueError("Activation code is required for completed status")

        try:
            redemption = RedemptionRequest.objects.select_for_update().get(pk=request_id)
        except (ValueError, ValidationError):
            raise RedemptionRequest.DoesNotExist(f"Redemption request {request_id} not found") from None

        if redemption.is_terminal:
            logger.warning(
                f"[REDEMPTION] ❌ Blocked transition of {redemption.pk}: "
                f"{redemption.status} -> {new_status}"
            )
            raise ValueError(f"Redemption request is already {redemption.status} and cannot be changed")

        if new_status not in RedemptionRequest.TERMINAL_STATUSES:
            raise ValueError(f"Invalid status transition: {redemption.status} -> {new_status}")

        now = timezone.now()
        redemption.status = new_status
        redemption.completed_at = now

        if new_status == RedemptionRequest.STATUS_COMPLETED:
            redemption.activation_code = activation_code
            redemption.instructions = instructions or None
            redemption.expires_at = now + timedelta(days=settings.REWARDS["REDEMPTION_VALIDITY_DAYS"])

        redemption.save()
        logger.info(f"[REDEMPTION] ✅ Request {redemption.pk} for {redemption.user.email} -> {new_status}")
        return redemption
