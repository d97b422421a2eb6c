import logging
from django.contrib.auth import get_user_model
from django.db.models.signals import post_save
from django.dispatch import receiver

from .services import PointsService

logger = logging.getLogger(__name__)
User = get_user_model()


@receiver(post_save, sender=User)
def award_welcome_bonus_for_new_user(sender, instance, created, **kwargs):
    """Every new account starts with the welcome bonus."""
    if not created:
        return
    try:
        PointsService.award_welcome_bonus(instance)
    except Exception as e:
        logger.error(
            f"[SIGNAL] ❌ Failed to award welcome bonus to {instance.email}: {str(e)}",
            exc_info=True
        )
