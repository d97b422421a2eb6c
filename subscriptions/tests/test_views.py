# subscriptions/tests/test_views.py
import uuid

from django.urls import reverse

from subscriptions.models import SubscriptionAvailability
from subscriptions.services import SubscriptionService
from core.tests.test_base import BaseTestCase


class AdminSubscriptionsViewTest(BaseTestCase):

    def setUp(self):
        self.client = self.auth_client(self.create_admin())
        self.url = reverse('admin_subscriptions')
        self.netflix = SubscriptionService.add('netflix', '1 month', 900)

    def _post(self, action, payload):
        return self.client.post(f'{self.url}?action={action}', payload, format='json')

    def test_list(self):
        response = self.client.get(f'{self.url}?action=list')

        self.assertEqual(response.status_code, 200)
        self.assertEqual([row['subscription_id'] for row in response.json()], ['netflix'])

    def test_toggle(self):
        response = self._post('toggle', {'id': str(self.netflix.id), 'currentStatus': True})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['id'], str(self.netflix.id))
        self.assertFalse(response.json()['in_stock'])

    def test_toggle_unknown(self):
        response = self._post('toggle', {'id': str(uuid.uuid4())})
        self.assert_error(response, 404, 'Subscription not found')

    def test_add(self):
        response = self._post('add', {'subscription_id': 'Disney Plus', 'duration': '12 months'})

        self.assertEqual(response.status_code, 201)
        rows = response.json()
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]['subscription_id'], 'disney_plus')

    def test_add_duplicate(self):
        response = self._post('add', {'subscription_id': 'NETFLIX', 'duration': '1 month'})
        self.assert_error(response, 400)

    def test_add_missing_fields(self):
        response = self._post('add', {'subscription_id': 'hulu'})
        self.assert_error(response, 400, 'Missing required fields: subscription_id, duration')

    def test_add_rejects_non_string_id(self):
        response = self._post('add', {'subscription_id': 123, 'duration': '1 month'})

        self.assert_error(response, 400, 'subscription_id: Not a valid string.')
        self.assertEqual(SubscriptionAvailability.objects.count(), 1)

    def test_add_rejects_non_integer_cost(self):
        for cost in ('900', 9.5, True, -1):
            with self.subTest(cost=cost):
                response = self._post('add', {'subscription_id': 'hulu', 'duration': '1 month', 'points_cost': cost})
                self.assert_error(response, 400)
        self.assertFalse(SubscriptionAvailability.objects.filter(subscription_id='hulu').exists())

    def test_toggle_rejects_object_id(self):
        response = self._post('toggle', {'id': {'pk': str(self.netflix.id)}})
        self.assert_error(response, 400)

    def test_toggle_rejects_non_boolean_status(self):
        response = self._post('toggle', {'id': str(self.netflix.id), 'currentStatus': 'sometimes'})

        self.assert_error(response, 400)
        self.netflix.refresh_from_db()
        self.assertTrue(self.netflix.in_stock)

    def test_delete_rejects_list_id(self):
        response = self._post('delete', {'id': [str(self.netflix.id)]})

        self.assert_error(response, 400)
        self.assertTrue(SubscriptionAvailability.objects.filter(pk=self.netflix.pk).exists())

    def test_delete(self):
        response = self._post('delete', {'id': str(self.netflix.id)})

        self.assertEqual(response.json(), {'success': True})
        self.assertFalse(SubscriptionAvailability.objects.exists())

    def test_non_object_body(self):
        response = self._post('delete', ['not', 'an', 'object'])
        self.assert_error(response, 400, 'Request body must be a JSON object')


class AvailableSubscriptionsViewTest(BaseTestCase):

    def test_only_in_stock_listed(self):
        SubscriptionService.add('netflix', '1 month')
        hulu = SubscriptionService.add('hulu', '1 month')
        SubscriptionService.toggle(hulu.id)

        response = self.auth_client(self.create_user()).get(reverse('subscriptions:available'))

        self.assertEqual(response.status_code, 200)
        self.assertEqual([row['subscription_id'] for row in response.json()], ['netflix'])
