# points/services.py
import logging
from datetime import timedelta

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import DatabaseError, transaction
from django.db.models import Sum
from django.utils import timezone

from .models import PointTransaction

logger = logging.getLogger(__name__)
User = get_user_model()


class PointsService:

    @staticmethod
    def _validate_points(points):
        if isinstance(points, bool) or not isinstance(points, int):
            raise ValueError("Points must be a whole number")
        if points <= 0:
            raise ValueError("Points must be greater than zero")
        return points

    @staticmethod
    def _sync(user, locked):
        # Keep the caller's instance in step with the locked row
        user.points = locked.points
        user.total_earned = locked.total_earned

    @staticmethod
    @transaction.atomic
    def credit(user, points, task_type, description=""):
        """
        Credit points to a user and write an ``earn`` ledger row.
        Returns the PointTransaction.
        """
        points = PointsService._validate_points(points)

        locked = User.objects.select_for_update().get(pk=user.pk)
        balance_before = locked.points
        locked.points = balance_before + points
        locked.total_earned = locked.total_earned + points
        locked.save(update_fields=["points", "total_earned", "updated_at"])
        PointsService._sync(user, locked)

        txn = PointTransaction.objects.create(
            user=locked,
            type=PointTransaction.TYPE_EARN,
            points=points,
            description=description,
            task_type=task_type,
            balance_after=locked.points,
        )

        logger.info(
            "Points credited: user=%s points=%s balance=%s->%s source=%s",
            locked.pk, points, balance_before, locked.points, task_type
        )
        return txn

    @staticmethod
    @transaction.atomic
    def debit(user, points, task_type, description=""):
        """
        Debit points from a user and write a ``redeem`` ledger row.
        Raises ValueError when the balance is insufficient.
        """
        points = PointsService._validate_points(points)

        locked = User.objects.select_for_update().get(pk=user.pk)
        if locked.points < points:
            raise ValueError(f"Insufficient points. Available: {locked.points}, Required: {points}")

        balance_before = locked.points
        locked.points = balance_before - points
        locked.save(update_fields=["points", "updated_at"])
        PointsService._sync(user, locked)

        txn = PointTransaction.objects.create(
            user=locked,
            type=PointTransaction.TYPE_REDEEM,
            points=points,
            description=description,
            task_type=task_type,
            balance_after=locked.points,
        )

        logger.info(
            "Points debited: user=%s points=%s balance=%s->%s source=%s",
            locked.pk, points, balance_before, locked.points, task_type
        )
        return txn

    @staticmethod
    @transaction.atomic
    def adjust(user, points_delta, description):
        """
        Admin adjustment. The balance floors at zero and ``total_earned`` only
        grows for positive adjustments. The ledger row records abs(delta).
        """
        if isinstance(points_delta, bool) or not isinstance(points_delta, int) or points_delta == 0:
            raise ValueError("pointsToAdd must be a non-zero whole number")
        if not description:
            raise ValueError("Description is required")

        locked = User.objects.select_for_update().get(pk=user.pk)
        balance_before = locked.points
        locked.points = max(0, balance_before + points_delta)
        if points_delta > 0:
            locked.total_earned = locked.total_earned + points_delta
        locked.save(update_fields=["points", "total_earned", "updated_at"])
        PointsService._sync(user, locked)

        txn = PointTransaction.objects.create(
            user=locked,
            type=PointTransaction.TYPE_EARN if points_delta > 0 else PointTransaction.TYPE_REDEEM,
            points=abs(points_delta),
            description=description,
            task_type=PointTransaction.SOURCE_ADMIN_ADJUSTMENT,
            balance_after=locked.points,
        )

        logger.info(
            "Points adjusted by admin: user=%s delta=%s balance=%s->%s",
            locked.pk, points_delta, balance_before, locked.points
        )
        return txn

    @staticmethod
    @transaction.atomic
    def award_welcome_bonus(user):
        """
        Credit the one-off welcome bonus. Idempotent: returns None when the
        user already has it.
        """
        User.objects.select_for_update().filter(pk=user.pk).first()

        already_awarded = PointTransaction.objects.filter(
            user=user,
            task_type=PointTransaction.SOURCE_WELCOME_BONUS,
        ).exists()
        if already_awarded:
            logger.debug(f"[WELCOME_BONUS] {user.email} already received the welcome bonus")
            return None

        bonus = settings.REWARDS["WELCOME_BONUS_POINTS"]
        txn = PointsService.credit(
            user,
            bonus,
            PointTransaction.SOURCE_WELCOME_BONUS,
            description="Welcome bonus",
        )
        logger.info(f"[WELCOME_BONUS] ✅ {user.email} received {bonus} welcome points")
        return txn


class DashboardService:
    """Read-side aggregates for the member dashboard. Failures are non-fatal."""

    @staticmethod
    def _safe(label, query, default=0):
        try:
            return query()
        except DatabaseError as e:
            logger.warning(f"[DASHBOARD] {label} query failed (non-critical): {e}")
            return default

    @staticmethod
    def stats(user):
        now = timezone.now()
        start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
        week_ago = now - timedelta(days=7)

        def earned_since(start):
            return PointTransaction.objects.filter(
                user=user,
                type=PointTransaction.TYPE_EARN,
                created_at__gte=start,
            ).aggregate(total=Sum("points"))["total"] or 0

        return {
            "today_earned": DashboardService._safe("today_earned", lambda: earned_since(start_of_day)),
            "weekly_earned": DashboardService._safe("weekly_earned", lambda: earned_since(week_ago)),
            "tasks_completed": DashboardService._safe(
                "tasks_completed",
                lambda: user.tasks.filter(completed=True).count(),
            ),
            "total_transactions": DashboardService._safe(
                "total_transactions",
                lambda: PointTransaction.objects.filter(user=user).count(),
            ),
            "points": user.points,
            "total_earned": user.total_earned,
        }

    @staticmethod
    def recent_activity(user, limit=15):
        return DashboardService._safe(
            "recent_activity",
            lambda: list(PointTransaction.objects.filter(user=user).order_by("-created_at")[:limit]),
            default=[],
        )
