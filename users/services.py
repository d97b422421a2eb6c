# users/services.py
import logging
from datetime import timedelta

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Count, Q
from django.utils import timezone

from points.models import PointTransaction
from points.services import PointsService
from redemptions.models import RedemptionRequest
from .models import User

logger = logging.getLogger(__name__)


class UserAdminService:
    """Back-office user management: listing, activity feed, points and status."""

    STATUS_ACTIONS = ("ban", "unban", "suspend", "activate")
    STATUS_ACTION_PAST = {
        "ban": "banned",
        "unban": "unbanned",
        "suspend": "suspended",
        "activate": "activated",
    }

    @staticmethod
    def list_users():
        return (
            User.objects.annotate(
                transaction_count=Count("point_transactions", distinct=True),
                task_count=Count("tasks", distinct=True),
                spin_count=Count("tasks", filter=Q(tasks__task_type="spin"), distinct=True),
                scratch_count=Count("tasks", filter=Q(tasks__task_type="scratch"), distinct=True),
            )
            .order_by("-date_joined")
        )

    @staticmethod
    def recent_activity(limit=10):
        transactions = list(
            PointTransaction.objects.select_related("user").order_by("-created_at")[:limit]
        )
        redemptions = list(
            RedemptionRequest.objects.select_related("user").order_by("-created_at")[:limit]
        )
        return transactions, redemptions

    @staticmethod
    def _get_user(user_id):
        if not user_id:
            raise ValueError("Missing required field: userId")
        try:
            return User.objects.get(pk=user_id)
        except (ValueError, TypeError, ValidationError, User.DoesNotExist):
            # Malformed UUIDs are treated as unknown users
            raise User.DoesNotExist(f"User {user_id} not found") from None

    @staticmethod
    def update_points(user_id, points_to_add, description):
        if not user_id or points_to_add is None or not description:
            raise ValueError("Missing required fields: userId, pointsToAdd, description")

        user = UserAdminService._get_user(user_id)
        if points_to_add == 0 and not isinstance(points_to_add, bool):
            logger.info(f"[ADMIN_USERS] Zero point adjustment for {user.email}, nothing recorded")
            return "Successfully added 0 points"

        PointsService.adjust(user, points_to_add, description)

        verb = "added" if points_to_add > 0 else "deducted"
        logger.info(f"[ADMIN_USERS] ✅ {abs(points_to_add)} points {verb} for {user.email}: {description}")
        return f"Successfully {verb} {abs(points_to_add)} points"

    @staticmethod
    @transaction.atomic
    def update_status(user_id, action):
        """
        ban: inactive with no expiry. suspend: inactive until now + SUSPENSION_HOURS.
        unban / activate: active again.
        """
        if not user_id or not action:
            raise ValueError("Missing required fields: userId, action")
        if not isinstance(action, str) or action not in UserAdminService.STATUS_ACTIONS:
            raise ValueError("Invalid action")

        UserAdminService._get_user(user_id)
        user = User.objects.select_for_update().get(pk=user_id)

        if action == "ban":
            user.is_active = False
            user.ban_expires_at = None
        elif action == "suspend":
            user.is_active = False
            user.ban_expires_at = timezone.now() + timedelta(hours=settings.REWARDS["SUSPENSION_HOURS"])
        else:
            user.is_active = True
            user.ban_expires_at = None

        user.save(update_fields=["is_active", "ban_expires_at", "updated_at"])
        logger.info(f"[ADMIN_USERS] ✅ {user.email} {UserAdminService.STATUS_ACTION_PAST[action]} (status={user.status})")
        return user

    @staticmethod
    def lift_expired_suspensions(now=None):
        """Reactivate users whose suspension has run out. Returns the count."""
        now = now or timezone.now()
        lifted = User.objects.filter(
            is_active=False,
            ban_expires_at__isnull=False,
            ban_expires_at__lte=now,
        ).update(is_active=True, ban_expires_at=None, updated_at=now)

        if lifted:
            logger.info(f"[SUSPENSIONS] Lifted {lifted} expired suspension(s)")
        return lifted
