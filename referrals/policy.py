# referrals/policy.py
"""
Referral commission schedule and the arithmetic built on it.

Everything here is pure: no database access, no side effects. The services
module applies these results to the ledger.

    Level 1 (direct)      500 bonus points   10% commission
    Level 2 (indirect)    200 bonus points    5% commission
    Level 3 (indirect)    100 bonus points    2% commission
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

MAX_REFERRAL_DEPTH = 3


@dataclass(frozen=True)
class CommissionTier:
    level: int
    bonus_points: int
    rate: Decimal  # percent


COMMISSION_SCHEDULE = {
    1: CommissionTier(level=1, bonus_points=500, rate=Decimal("10.00")),
    2: CommissionTier(level=2, bonus_points=200, rate=Decimal("5.00")),
    3: CommissionTier(level=3, bonus_points=100, rate=Decimal("2.00")),
}


@dataclass(frozen=True)
class CommissionAward:
    referrer_id: object
    level: int
    original_points: int
    commission_percentage: Decimal
    commission_points: int


def tier_for_level(level) -> CommissionTier:
    try:
        return COMMISSION_SCHEDULE[level]
    except KeyError:
        raise ValueError(f"Unsupported referral level: {level}") from None


def bonus_for_level(level) -> int:
    return tier_for_level(level).bonus_points


def rate_for_level(level) -> Decimal:
    return tier_for_level(level).rate


def commission_points(points, level) -> int:
    """round(points x rate / 100), halves rounded up."""
    raw = Decimal(points) * rate_for_level(level) / Decimal("100")
    return int(raw.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_commission(points, ancestor_chain):
    """
    One award per ancestor, nearest first. ``ancestor_chain[0]`` is the
    level-1 referrer; anything past MAX_REFERRAL_DEPTH is ignored.
    """
    if points < 0:
        raise ValueError("Points must not be negative")

    awards = []
    for level, referrer_id in enumerate(ancestor_chain[:MAX_REFERRAL_DEPTH], start=1):
        awards.append(CommissionAward(
            referrer_id=referrer_id,
            level=level,
            original_points=points,
            commission_percentage=rate_for_level(level),
            commission_points=commission_points(points, level),
        ))
    return awards


def schedule_as_dict():
    return [
        {
            "level": tier.level,
            "bonus_points": tier.bonus_points,
            "commission_percentage": tier.rate,
        }
        for tier in COMMISSION_SCHEDULE.values()
    ]
