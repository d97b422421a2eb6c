# referrals/services.py
import logging

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone
from django.contrib.auth import get_user_model

from points.models import PointTransaction
from points.services import PointsService
from .models import Referral, ReferralEarning, ReferralCode
from .policy import MAX_REFERRAL_DEPTH, bonus_for_level, compute_commission

from typing import Optional, Tuple

logger = logging.getLogger(__name__)
User = get_user_model()


class ReferralService:
    """Attribution chain management and referral payouts."""

    @classmethod
    def get_or_create_code(cls, user) -> ReferralCode:
        referral_code, created = ReferralCode.objects.get_or_create(
            user=user,
            defaults={"is_active": True}
        )
        if created:
            logger.info(f"[REFERRAL_CODE] Created referral code for {user.email}")
        return referral_code

    @classmethod
    def referral_link(cls, code: str, origin: Optional[str] = None) -> str:
        origin = (origin or settings.FRONTEND_URL).rstrip("/")
        return f"{origin}/register?ref={code}"

    @classmethod
    def upline(cls, user, depth: Optional[int] = None):
        """
        Walk level-1 referrers upwards from ``user``, nearest first.
        Stops at ``depth`` ancestors, at the top of the tree, or on a loop.
        """
        chain = []
        seen = {user.pk}
        current = user

        while depth is None or len(chain) < depth:
            parent = (
                Referral.objects.filter(referred=current, level=1)
                .select_related("referrer")
                .first()
            )
            if not parent or parent.referrer_id in seen:
                break
            chain.append(parent.referrer)
            seen.add(parent.referrer_id)
            current = parent.referrer

        return chain

    @classmethod
    def validate_and_create_referral(
        cls,
        new_user,
        referral_code: str,
    ) -> Tuple[bool, Optional[Referral], Optional[str]]:
        """
        Validate a referral code and create the attribution chain for a new user:
        a level-1 edge to the code owner plus level-2/3 edges to the owner's
        own referrers.

        Returns: (success: bool, referral: Referral|None, error: str|None)
        """
        code = (referral_code or "").strip().upper()
        logger.info(
            f"[REFERRAL_VALIDATE] Validating and creating referral for new user: {new_user.email} "
            f"with code: {code}"
        )

        try:
            ref_code = ReferralCode.objects.select_related("user").get(code=code, is_active=True)
        except ReferralCode.DoesNotExist:
            logger.warning(f"[REFERRAL_VALIDATE] ❌ Invalid referral code: {code}")
            return False, None, "Invalid or inactive referral code."

        referrer = ref_code.user

        # Prevent self-referral
        if referrer.pk == new_user.pk:
            logger.warning(f"[REFERRAL_VALIDATE] ❌ Self-referral attempt blocked for: {new_user.email}")
            return False, None, "You cannot refer yourself."

        if Referral.objects.filter(referred=new_user).exists():
            logger.warning(f"[REFERRAL_VALIDATE] ❌ {new_user.email} already has a referrer")
            return False, None, "This account has already been referred."

        # Prevent circular attribution
        referrer_upline = cls.upline(referrer)
        if any(ancestor.pk == new_user.pk for ancestor in referrer_upline):
            logger.warning(
                f"[REFERRAL_VALIDATE] ❌ Circular referral blocked: {new_user.email} is "
                f"an ancestor of {referrer.email}"
            )
            return False, None, "Circular referral detected."

        try:
            with transaction.atomic():
                level_1_referral = Referral.objects.create(
                    referrer=referrer,
                    referred=new_user,
                    referral_code=code,
                    level=1,
                )
                for level, ancestor in enumerate(referrer_upline[:MAX_REFERRAL_DEPTH - 1], start=2):
                    Referral.objects.create(
                        referrer=ancestor,
                        referred=new_user,
                        referral_code=code,
                        level=level,
                    )
                    logger.info(
                        f"[REFERRAL_VALIDATE] ✅ Level {level} referral created: {ancestor.email} → "
                        f"{new_user.email} (via {referrer.email})"
                    )
        except IntegrityError as e:
            logger.error(f"[REFERRAL_VALIDATE] ❌ Failed to create referral chain: {str(e)}", exc_info=True)
            return False, None, "Failed to create referral."

        logger.info(f"[REFERRAL_VALIDATE] ✅ Level 1 referral created: {referrer.email} → {new_user.email}")
        return True, level_1_referral, None

    @classmethod
    @transaction.atomic
    def award_signup_bonus(cls, referral: Referral) -> bool:
        """
        Complete a pending referral and credit the level bonus to the referrer.

        The pending → completed flip is a conditional UPDATE, so a second call
        for the same referral awards nothing and returns False.
        """
        bonus = bonus_for_level(referral.level)
        now = timezone.now()

        updated = Referral.objects.filter(
            pk=referral.pk,
            status=Referral.STATUS_PENDING,
        ).update(
            status=Referral.STATUS_COMPLETED,
            points_awarded=bonus,
            completed_at=now,
        )
        if not updated:
            logger.warning(
                f"[SIGNUP_BONUS] ⚠️ Referral {referral.pk} is not pending, skipping to prevent duplicate"
            )
            return False

        referral.status = Referral.STATUS_COMPLETED
        referral.points_awarded = bonus
        referral.completed_at = now

        PointsService.credit(
            referral.referrer,
            bonus,
            PointTransaction.SOURCE_REFERRAL_BONUS,
            description=f"Level {referral.level} referral bonus for {referral.referred.email}",
        )
        logger.info(
            f"[SIGNUP_BONUS] ✅ {referral.referrer.email} credited {bonus} points for referring "
            f"{referral.referred.email} (Level {referral.level})"
        )
        return True

    @classmethod
    def complete_referrals_for(cls, referred_user) -> int:
        """Award every pending referral edge of a user who completed a qualifying action."""
        referrals = (
            Referral.objects.filter(referred=referred_user, status=Referral.STATUS_PENDING)
            .select_related("referrer", "referred")
            .order_by("level")
        )

        credited_count = 0
        for referral in referrals:
            if cls.award_signup_bonus(referral):
                credited_count += 1

        if credited_count:
            logger.info(
                f"[SIGNUP_BONUS] Referral completion for {referred_user.email}: "
                f"{credited_count} bonus(es) credited"
            )
        return credited_count

    @classmethod
    def ancestor_edges(cls, user):
        """
        The user's attribution edges ordered by level, cut at the first gap so
        that position in the list always equals the ancestor's distance.
        """
        edges = []
        for edge in Referral.objects.filter(referred=user).select_related("referrer").order_by("level"):
            if edge.level != len(edges) + 1 or edge.level > MAX_REFERRAL_DEPTH:
                break
            edges.append(edge)
        return edges

    @classmethod
    def distribute_commission(cls, txn: PointTransaction):
        """
        Create one ReferralEarning per ancestor of the earning user and credit
        the commission. Re-running for the same transaction creates nothing.
        """
        if not txn.qualifies_for_commission:
            return []

        edges = cls.ancestor_edges(txn.user)
        if not edges:
            return []

        referrers = {edge.referrer_id: edge.referrer for edge in edges}
        awards = compute_commission(txn.points, [edge.referrer_id for edge in edges])

        created = []
        for award in awards:
            with transaction.atomic():
                if ReferralEarning.objects.filter(referrer_id=award.referrer_id, transaction=txn).exists():
                    logger.debug(
                        f"[COMMISSION] Earning already recorded for transaction {txn.pk} "
                        f"(Level {award.level}), skipping"
                    )
                    continue

                earning = ReferralEarning.objects.create(
                    referrer_id=award.referrer_id,
                    referred=txn.user,
                    transaction=txn,
                    original_points=award.original_points,
                    commission_percentage=award.commission_percentage,
                    commission_points=award.commission_points,
                    level=award.level,
                )

                if award.commission_points > 0:
                    PointsService.credit(
                        referrers[award.referrer_id],
                        award.commission_points,
                        PointTransaction.SOURCE_REFERRAL_COMMISSION,
                        description=(
                            f"Level {award.level} commission ({award.commission_percentage}%) "
                            f"from {txn.user.email}"
                        ),
                    )

            logger.info(
                f"[COMMISSION] ✅ {referrers[award.referrer_id].email} earns {award.commission_points} "
                f"points from {txn.user.email} (Level {award.level}, {award.original_points} points)"
            )
            created.append(earning)

        return created
