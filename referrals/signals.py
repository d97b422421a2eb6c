import logging
from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver

from points.models import PointTransaction
from tasks.signals import task_completed
from .models import ReferralCode
from .services import ReferralService

logger = logging.getLogger(__name__)
User = get_user_model()


@receiver(post_save, sender=User)
def create_referral_code_for_new_user(sender, instance, created, **kwargs):
    """
    Automatically create a ReferralCode when a new user is created.
    """
    if created and not ReferralCode.objects.filter(user=instance).exists():
        try:
            ReferralCode.objects.create(user=instance, is_active=True)
            logger.info(f"[SIGNAL] ✅ Referral code auto-created for new user: {instance.email}")
        except Exception as e:
            logger.error(
                f"[SIGNAL] ❌ Failed to create referral code for {instance.email}: {str(e)}",
                exc_info=True
            )


@receiver(post_save, sender=PointTransaction)
def distribute_commission_on_earning(sender, instance, created, **kwargs):
    """Pay upline commission for each new qualifying earning."""
    if not created or not instance.qualifies_for_commission:
        return
    try:
        with transaction.atomic():
            ReferralService.distribute_commission(instance)
    except Exception as e:
        logger.error(
            f"[SIGNAL] ❌ Commission distribution failed for transaction {instance.pk}: {str(e)}",
            exc_info=True
        )


@receiver(task_completed)
def complete_referrals_on_first_task(sender, task, user, first_completion, **kwargs):
    """A referred user's first completed task completes their referral edges."""
    if not first_completion:
        return
    try:
        with transaction.atomic():
            ReferralService.complete_referrals_for(user)
    except Exception as e:
        logger.error(
            f"[SIGNAL] ❌ Referral completion failed for {user.email}: {str(e)}",
            exc_info=True
        )
