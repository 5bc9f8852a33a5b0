"""
Shared pytest fixtures for the console API.
"""
import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from rest_framework.test import APIClient

User = get_user_model()


@pytest.fixture(autouse=True)
def clear_cache():
    """Clear cache before and after each test to prevent pollution."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def operator(db):
    return User.objects.create_user(
        username='operator',
        email='operator@apiary.test',
        password='testpass123',
        first_name='Hive',
        last_name='Keeper',
        role=User.UserRole.OPERATOR,
    )


@pytest.fixture
def auth_client(api_client, operator):
    api_client.force_authenticate(user=operator)
    return api_client
