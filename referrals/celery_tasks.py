# referrals/celery_tasks.py - Background tasks using Celery
from celery import shared_task
import logging

logger = logging.getLogger(__name__)


@shared_task
def process_pending_referrals():
    """Complete referral edges whose referred user already finished a task"""
    from django.core.management import call_command

    try:
        call_command('process_pending_referrals', limit=200)
        logger.info('Pending referrals processed successfully')
    except Exception as e:
        logger.error(f'Failed to process pending referrals: {str(e)}')
