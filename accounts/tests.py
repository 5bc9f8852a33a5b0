"""
Tests for console authentication endpoints.
"""
import pytest
from django.core.management import call_command
from rest_framework import status

from accounts.models import User

pytestmark = pytest.mark.django_db


class TestLogin:

    def test_login_returns_tokens_and_user(self, api_client, operator):
        response = api_client.post(
            '/api/auth/login',
            {'email': 'operator@apiary.test', 'password': 'testpass123'},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['access_token']
        assert response.data['refresh_token']
        assert response.data['user']['email'] == 'operator@apiary.test'
        assert response.data['user']['name'] == 'Hive Keeper'
        assert response.data['user']['role'] == 'operator'

    def test_wrong_password_is_rejected(self, api_client, operator):
        response = api_client.post(
            '/api/auth/login',
            {'email': 'operator@apiary.test', 'password': 'nope'},
            format='json',
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert 'error' in response.data
        operator.refresh_from_db()
        assert operator.failed_login_attempts == 1

    def test_account_locks_after_repeated_failures(self, api_client, operator):
        for _ in range(User.MAX_FAILED_LOGINS):
            api_client.post(
                '/api/auth/login',
                {'email': 'operator@apiary.test', 'password': 'nope'},
                format='json',
            )

        response = api_client.post(
            '/api/auth/login',
            {'email': 'operator@apiary.test', 'password': 'testpass123'},
            format='json',
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        operator.refresh_from_db()
        assert operator.is_account_locked()

    def test_successful_login_resets_failures(self, api_client, operator):
        operator.failed_login_attempts = 3
        operator.save()

        api_client.post(
            '/api/auth/login',
            {'email': 'operator@apiary.test', 'password': 'testpass123'},
            format='json',
        )

        operator.refresh_from_db()
        assert operator.failed_login_attempts == 0
        assert operator.last_login_at is not None


class TestSession:

    def test_me_requires_authentication(self, api_client):
        response = api_client.get('/api/auth/me')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_me_with_bearer_token(self, api_client, operator):
        login = api_client.post(
            '/api/auth/login',
            {'email': 'operator@apiary.test', 'password': 'testpass123'},
            format='json',
        )
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['access_token']}")

        response = api_client.get('/api/auth/me')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['id'] == str(operator.id)

    def test_logout_blacklists_refresh_token(self, api_client, operator):
        login = api_client.post(
            '/api/auth/login',
            {'email': 'operator@apiary.test', 'password': 'testpass123'},
            format='json',
        )
        refresh = login.data['refresh_token']

        response = api_client.post('/api/auth/logout', {'refresh_token': refresh}, format='json')
        assert response.status_code == status.HTTP_200_OK

        response = api_client.post('/api/auth/token/refresh', {'refresh': refresh}, format='json')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_logout_without_token_still_succeeds(self, api_client):
        response = api_client.post('/api/auth/logout', {}, format='json')
        assert response.status_code == status.HTTP_200_OK

    def test_logout_with_garbage_token_still_succeeds(self, api_client):
        response = api_client.post('/api/auth/logout', {'refresh_token': 'garbage'}, format='json')
        assert response.status_code == status.HTTP_200_OK


class TestCreateConsoleUserCommand:

    def test_creates_admin(self):
        call_command('create_console_user', 'boss@apiary.test', password='s3cret!', admin=True)

        user = User.objects.get(email='boss@apiary.test')
        assert user.role == User.UserRole.ADMIN
        assert user.is_staff
        assert user.check_password('s3cret!')

    def test_updates_existing_user(self, operator):
        call_command('create_console_user', 'operator@apiary.test', password='newpass!')

        operator.refresh_from_db()
        assert operator.check_password('newpass!')
        assert User.objects.filter(email='operator@apiary.test').count() == 1
