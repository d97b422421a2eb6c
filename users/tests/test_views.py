# users/tests/test_views.py
from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework.test import APIClient

from referrals.models import Referral
from core.tests.test_base import BaseTestCase

User = get_user_model()


class RegisterViewTest(BaseTestCase):

    def setUp(self):
        self.client = APIClient()
        self.url = reverse('users:register')

    def _register(self, url=None, **extra):
        data = {'email': 'newbie@rewardhub.test', 'password': self.password, 'full_name': 'New Bie'}
        data.update(extra)
        return self.client.post(url or self.url, data, format='json')

    def test_register(self):
        response = self._register()

        self.assertEqual(response.status_code, 201)
        data = response.json()
        self.assertEqual(data['user']['email'], 'newbie@rewardhub.test')
        self.assertEqual(data['user']['points'], 100)
        self.assertEqual(len(data['user']['referral_code']), 8)
        self.assertIn('access', data['tokens'])
        self.assertIn('refresh', data['tokens'])
        self.assertEqual(data['referral'], {'applied': False, 'error': None})

    def test_register_with_referral_code(self):
        referrer = self.create_user()
        response = self._register(referral_code=referrer.referral_code.code)

        self.assertEqual(response.status_code, 201)
        self.assertTrue(response.json()['referral']['applied'])
        new_user = User.objects.get(email='newbie@rewardhub.test')
        self.assertTrue(Referral.objects.filter(referrer=referrer, referred=new_user, level=1).exists())

    def test_register_with_ref_query_param(self):
        referrer = self.create_user()
        response = self._register(url=f'{self.url}?ref={referrer.referral_code.code}')

        self.assertEqual(response.status_code, 201)
        self.assertTrue(response.json()['referral']['applied'])

    def test_invalid_referral_code_does_not_block_registration(self):
        response = self._register(referral_code='BADCODE1')

        self.assertEqual(response.status_code, 201)
        self.assertEqual(
            response.json()['referral'],
            {'applied': False, 'error': 'Invalid or inactive referral code.'},
        )
        self.assertTrue(User.objects.filter(email='newbie@rewardhub.test').exists())

    def test_duplicate_email(self):
        self.create_user(email='newbie@rewardhub.test')
        response = self._register()
        self.assert_error(response, 400, 'email: A user with this email already exists.')

    def test_weak_password(self):
        response = self._register(password='123')
        self.assert_error(response, 400)

    def test_token_login(self):
        self.create_user(email='login@rewardhub.test')
        response = self.client.post(
            reverse('token_obtain_pair'),
            {'email': 'login@rewardhub.test', 'password': self.password},
            format='json',
        )
        self.assertEqual(response.status_code, 200)
        self.assertIn('access', response.json())


class MeViewTest(BaseTestCase):

    def test_me(self):
        user = self.create_user(full_name='Me Myself')
        response = self.auth_client(user).get(reverse('users:me'))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['full_name'], 'Me Myself')
        self.assertEqual(response.json()['status'], 'active')

    def test_me_requires_token(self):
        response = APIClient().get(reverse('users:me'))
        self.assert_error(response, 401, 'Missing authorization header')
