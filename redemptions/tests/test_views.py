# redemptions/tests/test_views.py
import uuid

from django.urls import reverse

from redemptions.models import RedemptionRequest
from redemptions.services import RedemptionService
from subscriptions.services import SubscriptionService
from core.tests.test_base import BaseTestCase


class AdminRedemptionsViewTest(BaseTestCase):

    def setUp(self):
        self.client = self.auth_client(self.create_admin())
        self.url = reverse('admin_redemptions')
        self.member = self.create_user(email='member@rewardhub.test', full_name='Member One')
        availability = SubscriptionService.add('netflix', '1 month', 50)
        self.redemption = RedemptionService.create_request(self.member, availability.id)

    def test_list_is_default_for_get(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, 200)
        rows = response.json()
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]['user_email'], 'member@rewardhub.test')
        self.assertEqual(rows[0]['user_name'], 'Member One')

    def test_update_is_default_for_post(self):
        response = self.client.post(self.url, {
            'requestId': str(self.redemption.id),
            'newStatus': 'completed',
            'activationCode': 'NFLX-0001',
        }, format='json')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['status'], 'completed')
        self.assertEqual(response.json()['activation_code'], 'NFLX-0001')
        self.assertIsNotNone(response.json()['expires_at'])

    def test_complete_without_code(self):
        response = self.client.post(f'{self.url}?action=update', {
            'requestId': str(self.redemption.id),
            'newStatus': 'completed',
        }, format='json')
        self.assert_error(response, 400, 'Activation code is required for completed status')

    def test_terminal_state_immutable(self):
        payload = {'requestId': str(self.redemption.id), 'newStatus': 'failed'}
        self.assertEqual(self.client.post(self.url, payload, format='json').status_code, 200)

        response = self.client.post(self.url, {
            'requestId': str(self.redemption.id), 'newStatus': 'completed', 'activationCode': 'LATE',
        }, format='json')
        self.assert_error(response, 400)
        self.redemption.refresh_from_db()
        self.assertEqual(self.redemption.status, RedemptionRequest.STATUS_FAILED)

    def test_unknown_request(self):
        response = self.client.post(self.url, {
            'requestId': str(uuid.uuid4()), 'newStatus': 'cancelled',
        }, format='json')
        self.assert_error(response, 404, 'Redemption request not found')

    def test_missing_fields(self):
        response = self.client.post(self.url, {'newStatus': 'failed'}, format='json')
        self.assert_error(response, 400, 'Missing required fields: requestId, newStatus')

    def test_list_status_rejected(self):
        response = self.client.post(self.url, {
            'requestId': str(self.redemption.id), 'newStatus': ['completed'],
        }, format='json')

        self.assert_error(response, 400, 'newStatus: Not a valid string.')
        self.redemption.refresh_from_db()
        self.assertEqual(self.redemption.status, RedemptionRequest.STATUS_PENDING)

    def test_object_status_rejected(self):
        response = self.client.post(self.url, {
            'requestId': str(self.redemption.id), 'newStatus': {'value': 'failed'},
        }, format='json')
        self.assert_error(response, 400)

    def test_numeric_request_id_rejected(self):
        response = self.client.post(self.url, {'requestId': 42, 'newStatus': 'failed'}, format='json')
        self.assert_error(response, 400, 'requestId: Not a valid string.')

    def test_numeric_activation_code_rejected(self):
        response = self.client.post(self.url, {
            'requestId': str(self.redemption.id), 'newStatus': 'completed', 'activationCode': 12345,
        }, format='json')

        self.assert_error(response, 400)
        self.redemption.refresh_from_db()
        self.assertEqual(self.redemption.status, RedemptionRequest.STATUS_PENDING)

    def test_update_via_get_rejected(self):
        response = self.client.get(f'{self.url}?action=update')
        self.assert_error(response, 400, 'Invalid action or method')


class MemberRedemptionsViewTest(BaseTestCase):

    def setUp(self):
        self.user = self.create_user()
        self.client = self.auth_client(self.user)
        self.url = reverse('redemptions:list')
        self.availability = SubscriptionService.add('spotify', '1 month', 80)

    def test_create_and_list(self):
        response = self.client.post(self.url, {'availability_id': str(self.availability.id)}, format='json')

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()['status'], 'pending')
        self.user.refresh_from_db()
        self.assertEqual(self.user.points, 20)

        rows = self.client.get(self.url).json()
        self.assertEqual([row['subscription_id'] for row in rows], ['spotify'])

    def test_insufficient_points(self):
        expensive = SubscriptionService.add('spotify', '12 months', 5000)
        response = self.client.post(self.url, {'availability_id': str(expensive.id)}, format='json')
        self.assert_error(response, 400, 'Insufficient points. Available: 100, Required: 5000')

    def test_unknown_availability(self):
        response = self.client.post(self.url, {'availability_id': str(uuid.uuid4())}, format='json')
        self.assert_error(response, 404, 'Subscription not found')

    def test_invalid_payload(self):
        response = self.client.post(self.url, {'availability_id': 'nope'}, format='json')
        self.assert_error(response, 400)

    def test_other_members_requests_hidden(self):
        RedemptionService.create_request(self.create_user(), self.availability.id)
        self.assertEqual(self.client.get(self.url).json(), [])
