# subscriptions/tests/test_services.py
import uuid

from django.test import SimpleTestCase

from subscriptions.models import SubscriptionAvailability
from subscriptions.services import SubscriptionService, normalize_subscription_id
from core.tests.test_base import BaseTestCase


class NormalizeSubscriptionIdTest(SimpleTestCase):

    def test_normalization(self):
        self.assertEqual(normalize_subscription_id('  Netflix Premium '), 'netflix_premium')
        self.assertEqual(normalize_subscription_id('YouTube\tMusic  Family'), 'youtube_music_family')
        self.assertEqual(normalize_subscription_id(None), '')


class SubscriptionServiceTest(BaseTestCase):

    def test_add(self):
        availability = SubscriptionService.add(' Spotify Premium', '1 month', 1200)

        self.assertEqual(availability.subscription_id, 'spotify_premium')
        self.assertEqual(availability.duration, '1 month')
        self.assertEqual(availability.points_cost, 1200)
        self.assertTrue(availability.in_stock)

    def test_add_duplicate_rejected(self):
        SubscriptionService.add('netflix', '1 month')
        with self.assertRaisesMessage(ValueError, 'already exists'):
            SubscriptionService.add('Netflix ', '1 month')
        self.assertEqual(SubscriptionAvailability.objects.count(), 1)

    def test_same_product_other_duration(self):
        SubscriptionService.add('netflix', '1 month')
        SubscriptionService.add('netflix', '3 months')
        self.assertEqual(SubscriptionAvailability.objects.count(), 2)

    def test_add_missing_fields(self):
        with self.assertRaises(ValueError):
            SubscriptionService.add('   ', '1 month')
        with self.assertRaises(ValueError):
            SubscriptionService.add('netflix', '')

    def test_add_bad_points_cost(self):
        for bad in (-1, '100', 1.5):
            with self.assertRaises(ValueError):
                SubscriptionService.add('netflix', '1 month', bad)

    def test_add_non_string_fields(self):
        with self.assertRaisesMessage(ValueError, 'must be strings'):
            SubscriptionService.add(123, '1 month')
        with self.assertRaisesMessage(ValueError, 'must be strings'):
            SubscriptionService.add('netflix', ['1 month'])

    def test_toggle_with_current_status(self):
        availability = SubscriptionService.add('netflix', '1 month')

        toggled = SubscriptionService.toggle(availability.id, True)
        self.assertFalse(toggled.in_stock)

        toggled = SubscriptionService.toggle(availability.id, False)
        self.assertTrue(toggled.in_stock)

    def test_toggle_flips_stored_value(self):
        availability = SubscriptionService.add('netflix', '1 month')
        self.assertFalse(SubscriptionService.toggle(availability.id).in_stock)
        self.assertTrue(SubscriptionService.toggle(availability.id).in_stock)

    def test_toggle_unknown(self):
        with self.assertRaises(SubscriptionAvailability.DoesNotExist):
            SubscriptionService.toggle(uuid.uuid4())

    def test_delete(self):
        availability = SubscriptionService.add('netflix', '1 month')
        SubscriptionService.delete(availability.id)
        self.assertFalse(SubscriptionAvailability.objects.exists())

    def test_delete_missing_id(self):
        with self.assertRaisesMessage(ValueError, 'Missing required field: id'):
            SubscriptionService.delete(None)
