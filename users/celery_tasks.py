# users/celery_tasks.py - Background tasks using Celery
from celery import shared_task
import logging

from .services import UserAdminService

logger = logging.getLogger(__name__)


@shared_task
def lift_expired_suspensions():
    """Reactivate users whose 24h suspension has expired"""
    try:
        lifted = UserAdminService.lift_expired_suspensions()
        logger.info(f'Expired suspensions lifted: {lifted}')
        return lifted
    except Exception as e:
        logger.error(f'Failed to lift expired suspensions: {str(e)}')
