# referrals/tests/test_commands.py
from io import StringIO

import pytest
from django.core.management import call_command
from django.db.models.signals import post_save
from django.utils import timezone

from points.models import PointTransaction
from referrals.celery_tasks import process_pending_referrals
from referrals.models import Referral, ReferralEarning
from referrals.signals import distribute_commission_on_earning
from tasks.models import Task


def _record_task(user):
    """A completed task written directly, so no task_completed signal fires."""
    return Task.objects.create(
        user=user, task_type='spin', points=0, completed=True, completed_at=timezone.now()
    )


def _run(*args):
    out = StringIO()
    call_command('process_pending_referrals', *args, stdout=out)
    return out.getvalue()


@pytest.mark.django_db
def test_sweep_completes_missed_referrals(referral_chain):
    a, b, c, d = referral_chain
    _record_task(d)
    assert Referral.objects.filter(referred=d, status=Referral.STATUS_PENDING).count() == 3

    output = _run()

    assert 'Signup bonuses credited: 3' in output
    assert not Referral.objects.filter(referred=d, status=Referral.STATUS_PENDING).exists()
    c.refresh_from_db()
    assert c.points == 100 + 500


@pytest.mark.django_db
def test_sweep_skips_users_without_tasks(referral_chain):
    output = _run()

    assert 'No users found to process.' in output
    assert Referral.objects.filter(status=Referral.STATUS_PENDING).count() == 6


@pytest.mark.django_db
def test_dry_run_changes_nothing(referral_chain):
    d = referral_chain[-1]
    _record_task(d)

    output = _run('--dry-run')

    assert 'DRY RUN' in output
    assert Referral.objects.filter(referred=d, status=Referral.STATUS_PENDING).count() == 3


@pytest.mark.django_db
def test_sweep_is_idempotent(referral_chain):
    _record_task(referral_chain[-1])
    _run()
    _run()

    assert PointTransaction.objects.filter(task_type=PointTransaction.SOURCE_REFERRAL_BONUS).count() == 3


@pytest.mark.django_db
def test_backfill_commissions(referral_chain):
    d = referral_chain[-1]
    post_save.disconnect(distribute_commission_on_earning, sender=PointTransaction)
    try:
        PointTransaction.objects.create(
            user=d, type=PointTransaction.TYPE_EARN, points=1000, task_type='survey', balance_after=1100
        )
    finally:
        post_save.connect(distribute_commission_on_earning, sender=PointTransaction)
    assert not ReferralEarning.objects.exists()

    output = _run('--backfill-commissions')

    assert 'Commission earnings backfilled: 3' in output
    assert sorted(ReferralEarning.objects.values_list('commission_points', flat=True)) == [20, 50, 100]


@pytest.mark.django_db
def test_celery_task_runs_sweep(referral_chain):
    _record_task(referral_chain[-1])

    process_pending_referrals()

    assert not Referral.objects.filter(referred=referral_chain[-1], status=Referral.STATUS_PENDING).exists()
