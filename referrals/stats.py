# referrals/stats.py
import logging

from django.db import DatabaseError

from .models import Referral, ReferralEarning

logger = logging.getLogger(__name__)

STAT_KEYS = (
    "total_referrals",
    "pending_referrals",
    "completed_referrals",
    "level1_referrals",
    "level2_referrals",
    "level3_referrals",
    "bonus_earnings",
    "commission_earnings",
    "total_earnings",
)


def empty_stats():
    return {key: 0 for key in STAT_KEYS}


def _field(record, name):
    if isinstance(record, dict):
        value = record.get(name)
    else:
        value = getattr(record, name, None)
    return value


def _number(record, name):
    value = _field(record, name)
    return value if isinstance(value, (int, float)) and not isinstance(value, bool) else 0


def project_referral_stats(referrals, earnings):
    """
    Fold a referrer's referral edges and commission rows into display stats.

    Accepts dicts or model instances; missing fields count as zero.
    total_earnings = bonus points of completed referrals + all commission points.
    """
    stats = empty_stats()

    for referral in referrals or ():
        stats["total_referrals"] += 1
        status = _field(referral, "status")
        if status == Referral.STATUS_PENDING:
            stats["pending_referrals"] += 1
        elif status == Referral.STATUS_COMPLETED:
            stats["completed_referrals"] += 1
            stats["bonus_earnings"] += _number(referral, "points_awarded")

        level = _field(referral, "level")
        if level in (1, 2, 3):
            stats[f"level{level}_referrals"] += 1

    for earning in earnings or ():
        stats["commission_earnings"] += _number(earning, "commission_points")

    stats["total_earnings"] = stats["bonus_earnings"] + stats["commission_earnings"]
    return stats


class ReferralStatsService:

    @staticmethod
    def for_user(user):
        """Stats for one referrer. Database failures yield zeroed stats."""
        try:
            referrals = list(
                Referral.objects.filter(referrer=user).values("status", "level", "points_awarded")
            )
            earnings = list(
                ReferralEarning.objects.filter(referrer=user).values("commission_points")
            )
        except DatabaseError as e:
            logger.warning(f"[REFERRAL_STATS] Stats unavailable for {user.email} (non-critical): {e}")
            return empty_stats()

        stats = project_referral_stats(referrals, earnings)
        logger.debug(f"[REFERRAL_STATS] {user.email}: {stats}")
        return stats
