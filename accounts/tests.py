from django.test import TestCase
from rest_framework.test import APIClient

from .models import User


class UserManagerTest(TestCase):
    def test_create_user_normalizes_email(self):
        user = User.objects.create_user(email='Ada@EXAMPLE.com', full_name='Ada', password='password123')
        self.assertEqual(user.email, 'Ada@example.com')
        self.assertTrue(user.check_password('password123'))
        self.assertFalse(user.is_staff)

    def test_create_user_requires_email(self):
        with self.assertRaises(ValueError):
            User.objects.create_user(email='', full_name='Nobody', password='password123')

    def test_create_superuser(self):
        admin = User.objects.create_superuser(email='admin@example.com', full_name='Admin', password='password123')
        self.assertTrue(admin.is_staff)
        self.assertTrue(admin.is_superuser)


class AccountApiTest(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(email='ada@example.com', full_name='Ada Lovelace', password='password123')
        User.objects.create_user(email='alan@example.com', full_name='Alan Turing', password='password123')
        User.objects.create_user(email='gone@example.com', full_name='Gone', password='password123', is_active=False)
        self.client = APIClient()

    def obtain_tokens(self):
        resp = self.client.post('/api/v1/accounts/token/', {
            'email': 'ada@example.com',
            'password': 'password123'
        }, format='json')
        self.assertEqual(resp.status_code, 200)
        return resp.data

    def test_token_and_me(self):
        tokens = self.obtain_tokens()
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")
        resp = self.client.get('/api/v1/accounts/me/')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data['email'], 'ada@example.com')
        self.assertEqual(resp.data['full_name'], 'Ada Lovelace')

    def test_wrong_password(self):
        resp = self.client.post('/api/v1/accounts/token/', {
            'email': 'ada@example.com',
            'password': 'nope'
        }, format='json')
        self.assertEqual(resp.status_code, 401)

    def test_me_requires_authentication(self):
        self.assertEqual(self.client.get('/api/v1/accounts/me/').status_code, 401)

    def test_profiles_ordered_by_name(self):
        self.client.force_authenticate(user=self.user)
        resp = self.client.get('/api/v1/accounts/profiles/')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([p['full_name'] for p in resp.data], ['Ada Lovelace', 'Alan Turing'])
        self.assertEqual(set(resp.data[0].keys()), {'id', 'email', 'full_name'})

    def test_logout_blacklists_refresh_token(self):
        tokens = self.obtain_tokens()
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")
        resp = self.client.post('/api/v1/accounts/logout/', {'refresh': tokens['refresh']}, format='json')
        self.assertEqual(resp.status_code, 205)

        resp = self.client.post('/api/v1/accounts/token/refresh/', {'refresh': tokens['refresh']}, format='json')
        self.assertEqual(resp.status_code, 401)

    def test_logout_with_bad_token(self):
        self.client.force_authenticate(user=self.user)
        resp = self.client.post('/api/v1/accounts/logout/', {'refresh': 'garbage'}, format='json')
        self.assertEqual(resp.status_code, 400)
        self.assertIn('refresh', resp.data)
