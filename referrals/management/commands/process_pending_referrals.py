# referrals/management/commands/process_pending_referrals.py

import logging
from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model

from points.models import PointTransaction
from referrals.models import Referral
from referrals.services import ReferralService

logger = logging.getLogger(__name__)
User = get_user_model()


class Command(BaseCommand):
    help = 'Award signup bonuses for pending referrals whose referred user has completed a task'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be processed without actually crediting',
        )
        parser.add_argument(
            '--limit',
            type=int,
            default=100,
            help='Maximum number of users to process (default: 100)',
        )
        parser.add_argument(
            '--backfill-commissions',
            action='store_true',
            help='Also pay commission for qualifying transactions that have no earnings yet',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        limit = options['limit']

        self.stdout.write(self.style.SUCCESS('=' * 70))
        self.stdout.write(self.style.SUCCESS('PENDING REFERRAL PROCESSING'))
        self.stdout.write(self.style.SUCCESS('=' * 70))

        if dry_run:
            self.stdout.write(self.style.WARNING('🔍 DRY RUN MODE - No actual changes will be made'))

        logger.info(f"[PENDING_CMD] Starting pending referral processing (dry_run={dry_run})")

        users = self._get_users_to_process(limit)
        if not users:
            self.stdout.write(self.style.WARNING('No users found to process.'))
        else:
            self.stdout.write(f'\nFound {len(users)} user(s) to check...\n')

        stats = {
            'users_checked': 0,
            'bonuses_credited': 0,
            'commissions_created': 0,
            'errors': 0,
        }

        for user in users:
            stats['users_checked'] += 1
            try:
                if dry_run:
                    pending = Referral.objects.filter(
                        referred=user, status=Referral.STATUS_PENDING
                    ).count()
                    self.stdout.write(f'  💰 {user.email}: WOULD complete {pending} referral(s) [DRY RUN]')
                    continue

                credited = ReferralService.complete_referrals_for(user)
                stats['bonuses_credited'] += credited
                self.stdout.write(self.style.SUCCESS(f'  ✅ {user.email}: {credited} bonus(es) credited'))
            except Exception as e:
                stats['errors'] += 1
                logger.error(f"[PENDING_CMD] Error processing user {user.email}: {str(e)}", exc_info=True)
                self.stdout.write(self.style.ERROR(f'❌ Error processing {user.email}: {str(e)}'))

        if options['backfill_commissions'] and not dry_run:
            stats['commissions_created'] = self._backfill_commissions(limit)

        self._print_summary(stats, dry_run)
        logger.info(f"[PENDING_CMD] Processing complete. Stats: {stats}")

    def _get_users_to_process(self, limit):
        """Referred users with pending edges and at least one completed task."""
        referred_ids = Referral.objects.filter(
            status=Referral.STATUS_PENDING
        ).values_list('referred_id', flat=True).distinct()

        users = User.objects.filter(
            id__in=referred_ids,
            tasks__completed=True,
        ).distinct()[:limit]
        return list(users)

    def _backfill_commissions(self, limit):
        referred_ids = Referral.objects.values_list('referred_id', flat=True).distinct()
        transactions = PointTransaction.objects.filter(
            user_id__in=referred_ids,
            type=PointTransaction.TYPE_EARN,
            referral_earnings__isnull=True,
        ).exclude(
            task_type__in=PointTransaction.NON_QUALIFYING_SOURCES
        ).select_related('user')[:limit]

        created = 0
        for txn in transactions:
            try:
                created += len(ReferralService.distribute_commission(txn))
            except Exception as e:
                logger.error(f"[PENDING_CMD] Commission backfill failed for {txn.pk}: {str(e)}", exc_info=True)
                self.stdout.write(self.style.ERROR(f'❌ Commission backfill failed for {txn.pk}: {str(e)}'))
        return created

    def _print_summary(self, stats, dry_run):
        """Print processing summary."""
        self.stdout.write('\n' + '=' * 70)
        self.stdout.write(self.style.SUCCESS('PROCESSING SUMMARY'))
        self.stdout.write('=' * 70)

        self.stdout.write(f"Users checked: {stats['users_checked']}")
        self.stdout.write(f"Signup bonuses credited: {stats['bonuses_credited']}")
        self.stdout.write(f"Commission earnings backfilled: {stats['commissions_created']}")

        if stats['errors'] > 0:
            self.stdout.write(self.style.ERROR(f"\nErrors: {stats['errors']}"))

        if dry_run:
            self.stdout.write(self.style.WARNING('\n⚠️  This was a DRY RUN - No actual changes were made'))
        else:
            self.stdout.write(self.style.SUCCESS('\n✅ Processing complete!'))
