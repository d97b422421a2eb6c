# referrals/tests/test_stats.py
from types import SimpleNamespace
from unittest.mock import patch

from django.db import DatabaseError
from django.test import SimpleTestCase

from referrals.stats import STAT_KEYS, empty_stats, project_referral_stats, ReferralStatsService
from tasks.services import TaskService
from core.tests.test_base import BaseTestCase


class ProjectReferralStatsTest(SimpleTestCase):
    """Folding referral edges and earnings into dashboard stats"""

    def test_empty_input_is_all_zero(self):
        self.assertEqual(project_referral_stats([], []), empty_stats())
        self.assertEqual(project_referral_stats(None, None), empty_stats())
        self.assertEqual(set(empty_stats()), set(STAT_KEYS))

    def test_counts_and_totals(self):
        referrals = [
            {'status': 'completed', 'level': 1, 'points_awarded': 500},
            {'status': 'pending', 'level': 1, 'points_awarded': 0},
            {'status': 'completed', 'level': 2, 'points_awarded': 200},
            SimpleNamespace(status='completed', level=3, points_awarded=100),
        ]
        earnings = [
            {'commission_points': 100},
            SimpleNamespace(commission_points=50),
        ]

        stats = project_referral_stats(referrals, earnings)

        self.assertEqual(stats['total_referrals'], 4)
        self.assertEqual(stats['pending_referrals'], 1)
        self.assertEqual(stats['completed_referrals'], 3)
        self.assertEqual(stats['level1_referrals'], 2)
        self.assertEqual(stats['level2_referrals'], 1)
        self.assertEqual(stats['level3_referrals'], 1)
        self.assertEqual(stats['bonus_earnings'], 800)
        self.assertEqual(stats['commission_earnings'], 150)
        self.assertEqual(stats['total_earnings'], 950)

    def test_pending_bonus_not_counted(self):
        stats = project_referral_stats([{'status': 'pending', 'level': 1, 'points_awarded': 500}], [])
        self.assertEqual(stats['bonus_earnings'], 0)
        self.assertEqual(stats['total_earnings'], 0)

    def test_missing_and_malformed_fields_count_as_zero(self):
        referrals = [{}, {'status': 'completed'}, {'status': 'completed', 'points_awarded': 'lots'}]
        earnings = [{}, {'commission_points': None}, {'commission_points': True}, SimpleNamespace()]

        stats = project_referral_stats(referrals, earnings)

        self.assertEqual(stats['total_referrals'], 3)
        self.assertEqual(stats['completed_referrals'], 2)
        self.assertEqual(stats['level1_referrals'], 0)
        self.assertEqual(stats['bonus_earnings'], 0)
        self.assertEqual(stats['commission_earnings'], 0)
        self.assertEqual(stats['total_earnings'], 0)


class ReferralStatsServiceTest(BaseTestCase):

    def test_stats_for_referrer(self):
        grandparent, parent, child = self.create_chain(3)
        TaskService.complete_task(child, 'survey', points=1000)

        stats = ReferralStatsService.for_user(grandparent)

        self.assertEqual(stats['total_referrals'], 2)
        self.assertEqual(stats['completed_referrals'], 1)
        self.assertEqual(stats['pending_referrals'], 1)
        self.assertEqual(stats['level1_referrals'], 1)
        self.assertEqual(stats['level2_referrals'], 1)
        self.assertEqual(stats['bonus_earnings'], 200)
        self.assertEqual(stats['commission_earnings'], 50)
        self.assertEqual(stats['total_earnings'], 250)

    def test_database_failure_yields_zero_stats(self):
        user = self.create_user()
        with patch('referrals.stats.Referral.objects.filter', side_effect=DatabaseError('timeout')):
            stats = ReferralStatsService.for_user(user)
        self.assertEqual(stats, empty_stats())
