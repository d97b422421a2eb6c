# celery.py - Celery configuration
import os
from celery import Celery

# Set the default Django settings module
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'rewardhub.settings')

app = Celery('rewardhub')

# Using a string here means the worker doesn't have to serialize
# the configuration object to child processes.
app.config_from_object('django.conf:settings', namespace='CELERY')

# Load task modules from all registered Django apps.
app.autodiscover_tasks(related_name='celery_tasks')

# Celery beat schedule for periodic tasks
app.conf.beat_schedule = {
    'process-pending-referrals-every-hour': {
        'task': 'referrals.celery_tasks.process_pending_referrals',
        'schedule': 60.0 * 60,  # Every hour
    },
    'lift-expired-suspensions': {
        'task': 'users.celery_tasks.lift_expired_suspensions',
        'schedule': 60.0 * 15,  # Every 15 minutes
    },
}

app.conf.timezone = 'UTC'
